from __future__ import annotations

import hashlib
from enum import Enum
from typing import Any, Callable, Union

from .errors import InvalidConfiguration


class HashAlgorithm(str, Enum):
    SHA1 = "sha1"
    SHA256 = "sha256"
    SHA512 = "sha512"

    @property
    def factory(self) -> Callable[..., Any]:
        return getattr(hashlib, self.value)

    @property
    def digest_size(self) -> int:
        return self.factory().digest_size

    @classmethod
    def parse(cls, value: Union[str, "HashAlgorithm"]) -> "HashAlgorithm":
        """Accept a member or a name such as ``"SHA-256"`` / ``"sha256"``."""

        if isinstance(value, cls):
            return value
        key = str(value).strip().lower().replace("-", "").replace("_", "")
        for member in cls:
            if member.value == key:
                return member
        raise InvalidConfiguration(
            f"Unsupported hash algorithm '{value}'. Supported: {[m.value for m in cls]}",
            context={"algorithm": value},
        )
