"""
totpgen: Time-Based One-Time Passwords (RFC 6238).

- Core configuration, errors and the ``Generator`` in `totpgen.core`
- Clock and time conversions in `totpgen.clock`
- Environment / base32 secret helpers in `totpgen.config`

Typical use::

    from totpgen import new_sha1

    code = new_sha1(b"12345678901234567890").now()
"""

from __future__ import annotations

from .core.enums import HashAlgorithm
from .core.errors import InvalidConfiguration, TotpError
from .core.schemas import GeneratorConfig
from .core.generator import Generator, hotp, new_sha1, new_sha256, new_sha512
from .config import decode_secret, generator_from_env, totp_now

__all__ = [
    "Generator",
    "GeneratorConfig",
    "HashAlgorithm",
    # Constructors
    "new_sha1",
    "new_sha256",
    "new_sha512",
    "generator_from_env",
    # Helpers
    "hotp",
    "decode_secret",
    "totp_now",
    # Errors
    "TotpError",
    "InvalidConfiguration",
]
