import os
import logging
from flask import Flask
from dotenv import load_dotenv

from . import base32
from .config import TotpConfig, env_settings
from .errors import (
    TotpError,
    EmptySecretError,
    InvalidSecretLengthError,
    InvalidSecretCharactersError,
    InvalidCodeFormatError,
    UnsupportedAlgorithmError,
    InvalidDigitsError,
    InvalidPeriodError,
    DiscrepancyOutOfRangeError,
    InvalidBase32CharacterError,
    SecretGenerationError,
)
from .messages import MESSAGES, MessageStore
from .totp import Totp, SecretAudit, pack_time_slice

def _load_env():
    home = os.getenv("TOTP_SERVICE_HOME", "/opt/totp-service")
    load_dotenv(dotenv_path=os.path.join(home, ".env"), override=False)

    # Optionally load extra env fragments (e.g., .env.d/*)
    envd = os.path.join(home, ".env.d")
    if os.path.isdir(envd):
        for name in sorted(os.listdir(envd)):
            p = os.path.join(envd, name)
            if os.path.isfile(p):
                load_dotenv(dotenv_path=p, override=True)

def create_app(overrides=None):
    _load_env()

    app = Flask(__name__)

    # TOTP settings (validated when the engine is built below)
    settings = env_settings()
    app.config["TOTP_ALGORITHM"]       = settings["algorithm"]
    app.config["TOTP_DIGITS"]          = settings["digits"]
    app.config["TOTP_PERIOD"]          = settings["period"]
    app.config["TOTP_MAX_DISCREPANCY"] = settings["max_discrepancy"]
    app.config["LOG_LEVEL"]            = os.getenv("LOG_LEVEL", "info")
    if overrides:
        app.config.update(overrides)

    logging.getLogger(__name__).setLevel(str(app.config["LOG_LEVEL"]).upper())

    # One engine per process; bad settings fail here, not on first request
    totp = Totp(max_discrepancy=app.config["TOTP_MAX_DISCREPANCY"])
    totp.configure(
        algorithm=app.config["TOTP_ALGORITHM"],
        digits=app.config["TOTP_DIGITS"],
        period=app.config["TOTP_PERIOD"],
    )
    app.extensions["totp"] = totp

    # Blueprints
    from .web import bp as web_bp
    app.register_blueprint(web_bp)    # /secret, healthz, readyz

    return app

__all__ = [
    "create_app",
    # Engine
    "Totp",
    "TotpConfig",
    "SecretAudit",
    "pack_time_slice",
    # Codec / messages
    "base32",
    "MESSAGES",
    "MessageStore",
    # Errors
    "TotpError",
    "EmptySecretError",
    "InvalidSecretLengthError",
    "InvalidSecretCharactersError",
    "InvalidCodeFormatError",
    "UnsupportedAlgorithmError",
    "InvalidDigitsError",
    "InvalidPeriodError",
    "DiscrepancyOutOfRangeError",
    "InvalidBase32CharacterError",
    "SecretGenerationError",
]
