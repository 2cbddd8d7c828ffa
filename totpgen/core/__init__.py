"""Core enums, errors, configuration schema and the generator."""

from .enums import HashAlgorithm
from .errors import InvalidConfiguration, TotpError
from .schemas import GeneratorConfig
from .generator import Generator, hotp, new_sha1, new_sha256, new_sha512

__all__ = [
    # Enums
    "HashAlgorithm",
    # Errors
    "TotpError",
    "InvalidConfiguration",
    # Schemas
    "GeneratorConfig",
    # Generator
    "Generator",
    "hotp",
    "new_sha1",
    "new_sha256",
    "new_sha512",
]
