# totp_service/errors.py
# Every failure raised by the codec and the engine derives from TotpError,
# so callers can treat "operation rejected" with a single except clause.


class TotpError(ValueError):
    pass


# --- secret / code validation ---

class EmptySecretError(TotpError):
    pass

class InvalidSecretLengthError(TotpError):
    pass

class InvalidSecretCharactersError(TotpError):
    pass

class InvalidCodeFormatError(TotpError):
    pass


# --- configuration ---

class UnsupportedAlgorithmError(TotpError):
    pass

class InvalidDigitsError(TotpError):
    pass

class InvalidPeriodError(TotpError):
    pass

class DiscrepancyOutOfRangeError(TotpError):
    pass


# --- encoding / entropy ---

class InvalidBase32CharacterError(TotpError):
    def __init__(self, message: str, character: str):
        super().__init__(message)
        self.character = character

class SecretGenerationError(TotpError):
    pass
