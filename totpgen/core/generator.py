from __future__ import annotations

import hashlib
import hmac
import struct
from datetime import timedelta
from typing import Any, Callable, Optional

from ..clock import UNIX_EPOCH, Clock, DurationLike, TimeLike, system_clock, to_micros, to_unix_micros
from ..logging import get_logger
from .enums import HashAlgorithm
from .errors import InvalidConfiguration
from .schemas import AlgorithmLike, GeneratorConfig

logger = get_logger(__name__)

DEFAULT_STEP = timedelta(seconds=30)
DEFAULT_DIGITS = 6

_UINT64_MASK = 0xFFFFFFFFFFFFFFFF


def hotp(key: bytes, counter: int, *, digits: int = DEFAULT_DIGITS, digestmod: Callable[..., Any] = hashlib.sha1) -> str:
    """HMAC-based one-time password for a single counter value (RFC 4226).

    Negative counters are encoded by their two's-complement bit pattern,
    i.e. ``-1`` becomes ``0xFFFFFFFFFFFFFFFF``.
    """

    msg = struct.pack(">Q", counter & _UINT64_MASK)
    digest = hmac.new(key, msg, digestmod).digest()

    # dynamic truncation
    offset = digest[-1] & 0x0F
    value = struct.unpack(">I", digest[offset : offset + 4])[0] & 0x7FFFFFFF

    return f"{value % 10 ** digits:0{digits}d}"


def _trunc_div(a: int, b: int) -> int:
    """Integer division rounding toward zero (``b`` is positive)."""

    q = abs(a) // b
    return q if a >= 0 else -q


class Generator:
    """Time-based one-time password generator (RFC 6238).

    Holds only immutable configuration, so one instance can be shared freely
    between threads. ``at`` is a pure function of the configuration and the
    time step counter; ``now`` and ``in_`` read the injected clock.
    """

    __slots__ = ("_config", "_clock", "_epoch_us", "_step_us")

    def __init__(
        self,
        key: bytes,
        *,
        epoch: TimeLike = UNIX_EPOCH,
        step: DurationLike = DEFAULT_STEP,
        digits: int = DEFAULT_DIGITS,
        algorithm: AlgorithmLike = HashAlgorithm.SHA1,
        clock: Optional[Clock] = None,
    ) -> None:
        try:
            config = GeneratorConfig(key=key, epoch=epoch, step=step, digits=digits, algorithm=algorithm)
        except InvalidConfiguration as e:
            logger.warning("Rejected generator configuration: %s", e)
            raise
        self._setup(config, clock)

    @classmethod
    def from_config(cls, config: GeneratorConfig, *, clock: Optional[Clock] = None) -> "Generator":
        generator = cls.__new__(cls)
        generator._setup(config, clock)
        return generator

    def _setup(self, config: GeneratorConfig, clock: Optional[Clock]) -> None:
        object.__setattr__(self, "_config", config)
        object.__setattr__(self, "_clock", clock or system_clock)
        object.__setattr__(self, "_epoch_us", config.epoch_micros)
        object.__setattr__(self, "_step_us", config.step_micros)
        logger.debug("Generator initialized: %s", config.to_dict())

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    # --- Configuration ---
    @property
    def config(self) -> GeneratorConfig:
        return self._config

    @property
    def digits(self) -> int:
        return self._config.digits

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._config.to_dict()})"

    # --- Codes ---
    def counter(self, t: TimeLike) -> int:
        """Signed number of whole steps between the epoch and ``t``."""

        return _trunc_div(to_unix_micros(t) - self._epoch_us, self._step_us)

    def at(self, t: TimeLike) -> str:
        """Return the one-time password valid at time ``t``."""

        return self._code(to_unix_micros(t))

    def now(self) -> str:
        """Return the one-time password valid at the time of calling."""

        return self.at(self._clock())

    def in_(self, d: DurationLike) -> str:
        """Return the one-time password valid after waiting ``d`` (negative looks back)."""

        return self._code(to_unix_micros(self._clock()) + to_micros(d))

    def remaining(self, t: Optional[TimeLike] = None) -> timedelta:
        """Time left until the code valid at ``t`` (default: now) changes."""

        micros = to_unix_micros(self._clock() if t is None else t)
        elapsed = micros - self._epoch_us
        ct = _trunc_div(elapsed, self._step_us)
        if elapsed >= 0 or ct == 0:
            boundary = (ct + 1) * self._step_us
        else:
            # negative counters cover (ct - 1) * step < elapsed <= ct * step
            boundary = ct * self._step_us + 1
        return timedelta(microseconds=boundary - elapsed)

    def _code(self, micros: int) -> str:
        ct = _trunc_div(micros - self._epoch_us, self._step_us)
        return hotp(self._config.key, ct, digits=self._config.digits, digestmod=self._config.digestmod)


# --- Construction helpers ---
def new_sha1(key: bytes, *, clock: Optional[Clock] = None) -> Generator:
    """SHA-1 generator, Unix epoch, 30 second steps, 6 digits."""

    return Generator(key, algorithm=HashAlgorithm.SHA1, clock=clock)


def new_sha256(key: bytes, *, clock: Optional[Clock] = None) -> Generator:
    """SHA-256 generator, Unix epoch, 30 second steps, 6 digits."""

    return Generator(key, algorithm=HashAlgorithm.SHA256, clock=clock)


def new_sha512(key: bytes, *, clock: Optional[Clock] = None) -> Generator:
    """SHA-512 generator, Unix epoch, 30 second steps, 6 digits."""

    return Generator(key, algorithm=HashAlgorithm.SHA512, clock=clock)
