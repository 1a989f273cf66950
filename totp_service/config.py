# totp_service/config.py
from __future__ import annotations

import os
from dataclasses import dataclass

SUPPORTED_ALGORITHMS = ("sha1", "sha256", "sha512")
SUPPORTED_DIGITS = (6, 8)

DEFAULT_ALGORITHM = "sha1"  # widely supported by authenticator apps
DEFAULT_DIGITS = 6
DEFAULT_PERIOD = 30
DEFAULT_MAX_DISCREPANCY = 10

SECRET_BYTES = 20  # 160 bits, RFC 4226 recommendation
MIN_STRONG_SECRET_BYTES = 20


@dataclass(frozen=True)
class TotpConfig:
    algorithm: str = DEFAULT_ALGORITHM
    digits: int = DEFAULT_DIGITS
    period: int = DEFAULT_PERIOD


def _int_setting(name: str, default: int):
    # non-numeric values stay strings so the engine rejects them with its own error
    raw = os.getenv(name, str(default)).strip()
    try:
        return int(raw)
    except ValueError:
        return raw


def env_settings() -> dict:
    """Raw TOTP settings from the environment (validated later by the engine)."""
    return {
        "algorithm": os.getenv("TOTP_ALGORITHM", DEFAULT_ALGORITHM).strip().lower(),
        "digits": _int_setting("TOTP_DIGITS", DEFAULT_DIGITS),
        "period": _int_setting("TOTP_PERIOD", DEFAULT_PERIOD),
        "max_discrepancy": _int_setting("TOTP_MAX_DISCREPANCY", DEFAULT_MAX_DISCREPANCY),
    }
