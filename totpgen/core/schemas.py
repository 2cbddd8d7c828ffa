from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, Union

from ..clock import UNIX_EPOCH, TimeLike, DurationLike, to_micros, to_unix_micros
from .enums import HashAlgorithm
from .errors import InvalidConfiguration

MIN_DIGITS = 6
MAX_DIGITS = 8
# offset is at most 0x0F and four bytes are read from it
MIN_DIGEST_SIZE = 20

AlgorithmLike = Union[HashAlgorithm, str, Callable[..., Any]]


@dataclass(frozen=True)
class GeneratorConfig:
    """Immutable, validated TOTP parameters.

    ``algorithm`` is a :class:`HashAlgorithm`, an algorithm name, or any
    hashlib-style constructor accepted by :func:`hmac.new` as ``digestmod``.
    """

    key: bytes = field(repr=False)
    epoch: Union[datetime, int, float] = UNIX_EPOCH
    step: Union[timedelta, int, float] = timedelta(seconds=30)
    digits: int = MIN_DIGITS
    algorithm: AlgorithmLike = HashAlgorithm.SHA1

    def __post_init__(self) -> None:
        if isinstance(self.key, (bytearray, memoryview)):
            object.__setattr__(self, "key", bytes(self.key))
        if not isinstance(self.key, bytes):
            raise InvalidConfiguration(
                f"key must be bytes, got {type(self.key).__name__}",
                context={"key_type": type(self.key).__name__},
            )

        object.__setattr__(self, "epoch", _validate_epoch(self.epoch))
        object.__setattr__(self, "step", _validate_step(self.step))

        if isinstance(self.digits, bool) or not isinstance(self.digits, int) or not MIN_DIGITS <= self.digits <= MAX_DIGITS:
            raise InvalidConfiguration(
                f"digits must be an integer in [{MIN_DIGITS}, {MAX_DIGITS}], got {self.digits!r}",
                context={"digits": self.digits},
            )

        algorithm = self.algorithm
        if isinstance(algorithm, str):
            algorithm = HashAlgorithm.parse(algorithm)
            object.__setattr__(self, "algorithm", algorithm)
        elif not callable(algorithm):
            raise InvalidConfiguration(
                f"algorithm must be a HashAlgorithm, a name or a hash constructor, got {algorithm!r}",
                context={"algorithm": algorithm},
            )

        try:
            size = self.digest_size
        except (AttributeError, TypeError, ValueError) as e:
            raise InvalidConfiguration(
                f"algorithm {algorithm!r} does not produce a hash object: {e}",
                context={"algorithm": algorithm},
            ) from e
        if isinstance(size, bool) or not isinstance(size, int):
            raise InvalidConfiguration(
                f"algorithm {algorithm!r} reports a non-integer digest size {size!r}",
                context={"algorithm": algorithm},
            )
        if size < MIN_DIGEST_SIZE:
            raise InvalidConfiguration(
                f"digest size {size} is too short for dynamic truncation (need >= {MIN_DIGEST_SIZE})",
                context={"digest_size": size},
            )

    # --- Derived values ---
    @property
    def digestmod(self) -> Callable[..., Any]:
        if isinstance(self.algorithm, HashAlgorithm):
            return self.algorithm.factory
        return self.algorithm

    @property
    def digest_size(self) -> int:
        if isinstance(self.algorithm, HashAlgorithm):
            return self.algorithm.digest_size
        return self.digestmod().digest_size

    @property
    def epoch_micros(self) -> int:
        return to_unix_micros(self.epoch)

    @property
    def step_micros(self) -> int:
        return to_micros(self.step)

    def to_dict(self) -> Dict[str, Any]:
        """Loggable summary; the key itself is left out."""

        algorithm = self.algorithm
        name = algorithm.value if isinstance(algorithm, HashAlgorithm) else getattr(algorithm, "__name__", repr(algorithm))
        return {
            "key_length": len(self.key),
            "epoch": self.epoch.isoformat(),
            "step_seconds": self.step.total_seconds(),
            "digits": self.digits,
            "algorithm": name,
        }


def _validate_epoch(epoch: TimeLike) -> datetime:
    if isinstance(epoch, datetime):
        if epoch.tzinfo is None:
            raise InvalidConfiguration("epoch must be timezone-aware", context={"epoch": epoch})
        return epoch
    if isinstance(epoch, (int, float)) and not isinstance(epoch, bool):
        try:
            return UNIX_EPOCH + timedelta(seconds=epoch)
        except (OverflowError, ValueError) as e:
            raise InvalidConfiguration(f"epoch out of range: {epoch!r}", context={"epoch": epoch}) from e
    raise InvalidConfiguration(
        f"epoch must be a datetime or Unix seconds, got {type(epoch).__name__}",
        context={"epoch": epoch},
    )


def _validate_step(step: DurationLike) -> timedelta:
    if isinstance(step, (int, float)) and not isinstance(step, bool):
        try:
            step = timedelta(seconds=step)
        except (OverflowError, ValueError) as e:
            raise InvalidConfiguration(f"step out of range: {step!r}", context={"step": step}) from e
    if not isinstance(step, timedelta):
        raise InvalidConfiguration(
            f"step must be a timedelta or seconds, got {type(step).__name__}",
            context={"step": step},
        )
    if to_micros(step) <= 0:
        raise InvalidConfiguration(f"step must be positive, got {step}", context={"step": step})
    return step
