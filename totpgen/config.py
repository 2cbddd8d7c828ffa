from __future__ import annotations

import binascii
import os
from base64 import b32decode
from typing import Optional

from dotenv import find_dotenv, load_dotenv

from .clock import Clock
from .core.errors import InvalidConfiguration
from .core.generator import DEFAULT_DIGITS, Generator
from .logging import get_logger

logger = get_logger(__name__)


def getenv(key: str, default: Optional[str] = None, *aliases: str) -> Optional[str]:
    """Return first non-empty env var among key and aliases."""

    for k in (key, *aliases):
        v = os.getenv(k)
        if v not in (None, ""):
            return v
    return default


def _getenv_number(key: str, default: float) -> float:
    v = getenv(key)
    if v is None:
        return default
    try:
        number = float(v)
    except ValueError as e:
        raise InvalidConfiguration(f"{key} must be a number, got {v!r}", context={"env": key}) from e
    return int(number) if number.is_integer() else number


def decode_secret(secret: str) -> bytes:
    """Decode a base32 shared secret as typed by a user.

    Case, embedded spaces/dashes and missing ``=`` padding are tolerated.
    """

    cleaned = "".join(secret.split()).replace("-", "").upper()
    cleaned += "=" * (-len(cleaned) % 8)
    try:
        return b32decode(cleaned)
    except binascii.Error as e:
        raise InvalidConfiguration("secret is not valid base32") from e


def generator_from_env(
    prefix: str = "TOTP_",
    *,
    load_dotenv_file: bool = True,
    clock: Optional[Clock] = None,
) -> Generator:
    """Build a Generator from ``<prefix>SECRET``, ``ALGORITHM``, ``STEP``, ``DIGITS`` and ``EPOCH``."""

    if load_dotenv_file:
        load_dotenv(find_dotenv(usecwd=True))

    secret = getenv(f"{prefix}SECRET")
    if secret is None:
        raise InvalidConfiguration(f"{prefix}SECRET is not set", context={"env": f"{prefix}SECRET"})

    algorithm = getenv(f"{prefix}ALGORITHM", "sha1", f"{prefix}DIGEST")
    step = _getenv_number(f"{prefix}STEP", 30)
    digits = _getenv_number(f"{prefix}DIGITS", DEFAULT_DIGITS)
    epoch = _getenv_number(f"{prefix}EPOCH", 0)

    logger.debug(
        "Loaded TOTP settings from env: prefix=%s algorithm=%s step=%s digits=%s epoch=%s",
        prefix,
        algorithm,
        step,
        digits,
        epoch,
    )
    return Generator(
        decode_secret(secret),
        epoch=epoch,
        step=step,
        digits=digits,  # type: ignore[arg-type]
        algorithm=algorithm,  # type: ignore[arg-type]
        clock=clock,
    )


def totp_now(secret: str, algorithm: str = "sha1") -> str:
    """Return current TOTP for a base32 secret with RFC defaults."""

    return Generator(decode_secret(secret), algorithm=algorithm).now()
