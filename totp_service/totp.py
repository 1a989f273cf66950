# totp_service/totp.py
# TOTP (RFC 6238) engine over HOTP (RFC 4226) dynamic truncation.

from __future__ import annotations

import dataclasses
import hmac
import logging
import os
import re
import struct
import time
from dataclasses import dataclass, field
from typing import Optional
from urllib.parse import quote

from . import base32
from .config import (
    DEFAULT_MAX_DISCREPANCY,
    MIN_STRONG_SECRET_BYTES,
    SECRET_BYTES,
    SUPPORTED_ALGORITHMS,
    SUPPORTED_DIGITS,
    TotpConfig,
)
from .errors import (
    DiscrepancyOutOfRangeError,
    EmptySecretError,
    InvalidCodeFormatError,
    InvalidDigitsError,
    InvalidPeriodError,
    InvalidSecretCharactersError,
    InvalidSecretLengthError,
    SecretGenerationError,
    TotpError,
    UnsupportedAlgorithmError,
)
from .messages import MESSAGES

log = logging.getLogger(__name__)

_SECRET_RE = re.compile(r"[A-Z2-7]+=*")
_U64_MASK = 0xFFFFFFFFFFFFFFFF


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def pack_time_slice(time_slice: int) -> bytes:
    # 8-byte big-endian counter; negative slices wrap like a two's-complement u64
    return struct.pack(">Q", time_slice & _U64_MASK)


def _dynamic_truncate(hmac_digest: bytes) -> int:
    offset = hmac_digest[-1] & 0x0F
    code = ((hmac_digest[offset] & 0x7f) << 24 |
            (hmac_digest[offset + 1] & 0xff) << 16 |
            (hmac_digest[offset + 2] & 0xff) << 8 |
            (hmac_digest[offset + 3] & 0xff))
    return code


@dataclass(frozen=True)
class SecretAudit:
    length_bytes: int = 0
    is_strong: bool = False
    warnings: list = field(default_factory=list)

    def as_dict(self) -> dict:
        return dataclasses.asdict(self)


class Totp:
    """Generates and verifies time-based one-time codes.

    The engine keeps a single immutable ``TotpConfig`` and never stores time or
    replay state: callers pass time slices in (or let the engine read the
    clock) and persist the slice returned by ``verify_code_once`` themselves.
    Each operation reads the configuration snapshot once, so a concurrent
    ``configure`` cannot mix old and new settings within one call.
    """

    def __init__(self, max_discrepancy: int = DEFAULT_MAX_DISCREPANCY,
                 config: Optional[TotpConfig] = None, messages=MESSAGES):
        self._messages = messages
        if not _is_int(max_discrepancy) or max_discrepancy < 0:
            raise DiscrepancyOutOfRangeError(messages.get("configuration.invalid_max_discrepancy"))
        self._max_discrepancy = max_discrepancy
        self._config = TotpConfig()
        if config is not None:
            self.configure(algorithm=config.algorithm, digits=config.digits, period=config.period)

    # ---------- configuration ----------

    @property
    def config(self) -> TotpConfig:
        return self._config

    @property
    def algorithm(self) -> str:
        return self._config.algorithm

    @property
    def digits(self) -> int:
        return self._config.digits

    @property
    def period(self) -> int:
        return self._config.period

    @property
    def max_discrepancy(self) -> int:
        return self._max_discrepancy

    def configure(self, algorithm: Optional[str] = None, digits: Optional[int] = None,
                  period: Optional[int] = None) -> TotpConfig:
        """Apply the given options; ``None`` leaves a setting unchanged.

        Every option is checked before any is applied.
        """
        changes = {}
        if algorithm is not None:
            if algorithm not in SUPPORTED_ALGORITHMS:
                raise UnsupportedAlgorithmError(self._messages.get("configuration.unsupported_algorithm"))
            changes["algorithm"] = algorithm
        if digits is not None:
            if not _is_int(digits) or digits not in SUPPORTED_DIGITS:
                raise InvalidDigitsError(self._messages.get("configuration.invalid_digits"))
            changes["digits"] = digits
        if period is not None:
            if not _is_int(period) or period <= 0:
                raise InvalidPeriodError(self._messages.get("configuration.invalid_period"))
            changes["period"] = period

        if changes:
            self._config = dataclasses.replace(self._config, **changes)
            log.debug("TOTP configured: algorithm=%s digits=%d period=%d",
                      self._config.algorithm, self._config.digits, self._config.period)
        return self._config

    # ---------- validation ----------

    def validate_secret(self, secret: str) -> bytes:
        """Check the Base32 shape of ``secret`` and return the decoded key.

        Keys shorter than 20 bytes are accepted but logged as weak.
        """
        if not secret:
            raise EmptySecretError(self._messages.get("validation.secret_empty"))
        if not isinstance(secret, str):
            raise InvalidSecretCharactersError(self._messages.get("validation.secret_characters"))
        if len(secret) % 8 != 0:
            raise InvalidSecretLengthError(self._messages.get("validation.secret_length"))
        if _SECRET_RE.fullmatch(secret) is None:
            raise InvalidSecretCharactersError(self._messages.get("validation.secret_characters"))

        key = base32.decode(secret, messages=self._messages)
        if len(key) < MIN_STRONG_SECRET_BYTES:
            log.warning(self._messages.get("security.weak_secret_log", len(key)))
        return key

    def _check_code(self, code: str, digits: int) -> None:
        if not isinstance(code, str) or len(code) != digits or not code.isascii() or not code.isdigit():
            raise InvalidCodeFormatError(self._messages.get("validation.code_format", digits))

    def validate_code(self, code: str) -> None:
        self._check_code(code, self._config.digits)

    def _check_discrepancy(self, discrepancy: int) -> None:
        if not _is_int(discrepancy) or discrepancy < 0 or discrepancy > self._max_discrepancy:
            raise DiscrepancyOutOfRangeError(
                self._messages.get("configuration.invalid_discrepancy", self._max_discrepancy))

    # ---------- codes ----------

    @staticmethod
    def _time_slice(cfg: TotpConfig, now: Optional[float] = None) -> int:
        if now is None:
            now = time.time()
        return int(now // cfg.period)

    def current_time_slice(self, now: Optional[float] = None) -> int:
        return self._time_slice(self._config, now)

    def generate_secret(self) -> str:
        try:
            raw = os.urandom(SECRET_BYTES)
        except (OSError, NotImplementedError) as exc:
            raise SecretGenerationError(
                self._messages.get("generation.random_source_failed", exc)) from exc
        return base32.encode(raw)

    @staticmethod
    def _hotp(key: bytes, time_slice: int, cfg: TotpConfig) -> str:
        digest = hmac.new(key, pack_time_slice(time_slice), cfg.algorithm).digest()
        code_int = _dynamic_truncate(digest) % (10 ** cfg.digits)
        return str(code_int).zfill(cfg.digits)

    def get_code(self, secret: str, time_slice: Optional[int] = None) -> str:
        cfg = self._config
        key = self.validate_secret(secret)
        if time_slice is None:
            time_slice = self._time_slice(cfg)
        return self._hotp(key, time_slice, cfg)

    def verify_code(self, secret: str, code: str, discrepancy: int = 1,
                    time_slice: Optional[int] = None) -> bool:
        cfg = self._config
        self._check_discrepancy(discrepancy)
        key = self.validate_secret(secret)
        self._check_code(code, cfg.digits)

        current = time_slice if time_slice is not None else self._time_slice(cfg)
        for offset in range(-discrepancy, discrepancy + 1):
            if hmac.compare_digest(self._hotp(key, current + offset, cfg), code):
                return True
        return False

    def verify_code_once(self, secret: str, code: str, last_accepted_slice: int,
                         discrepancy: int = 1, time_slice: Optional[int] = None) -> Optional[int]:
        """Like ``verify_code`` but single-use.

        Slices at or below ``last_accepted_slice`` are never considered. On a
        match the matching slice is returned; store it and pass it back as
        ``last_accepted_slice`` on the next call. Returns None otherwise.
        """
        cfg = self._config
        self._check_discrepancy(discrepancy)
        key = self.validate_secret(secret)
        self._check_code(code, cfg.digits)

        current = time_slice if time_slice is not None else self._time_slice(cfg)
        for offset in range(-discrepancy, discrepancy + 1):
            candidate = current + offset
            if candidate <= last_accepted_slice:
                log.debug("Skipping already-accepted time slice %d", candidate)
                continue
            if hmac.compare_digest(self._hotp(key, candidate, cfg), code):
                return candidate
        return None

    # ---------- diagnostics / provisioning ----------

    def audit_secret(self, secret: str) -> SecretAudit:
        """Report on secret strength. Never raises."""
        msg = self._messages
        if not secret:
            return SecretAudit(warnings=[msg.get("security.audit_secret_empty")])

        if (not isinstance(secret, str) or len(secret) % 8 != 0
                or _SECRET_RE.fullmatch(secret) is None):
            return SecretAudit(warnings=[msg.get("security.audit_invalid_base32")])

        try:
            length = len(base32.decode(secret, messages=msg))
        except TotpError:
            return SecretAudit(warnings=[msg.get("security.audit_invalid_base32")])

        warnings = []
        if length == 0:
            warnings.append(msg.get("security.audit_zero_bytes"))
        elif length < MIN_STRONG_SECRET_BYTES:
            warnings.append(msg.get("security.audit_weak_secret", length))
        return SecretAudit(length_bytes=length, is_strong=length >= MIN_STRONG_SECRET_BYTES,
                           warnings=warnings)

    def generate_uri(self, secret: str, label: str, issuer: str) -> str:
        cfg = self._config
        self.validate_secret(secret)
        enc_label = quote(label, safe="")
        enc_issuer = quote(issuer, safe="")
        params = (f"secret={secret}&issuer={enc_issuer}&algorithm={cfg.algorithm.upper()}"
                  f"&digits={cfg.digits}&period={cfg.period}")
        return f"otpauth://totp/{enc_issuer}:{enc_label}?{params}"
