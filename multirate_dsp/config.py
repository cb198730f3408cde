"""Design defaults shared by the Kaiser and FIR designers."""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Mapping

from .errors import ParameterError

ENV_PREFIX = "MULTIRATE_DSP_"


@dataclass(frozen=True)
class DSPConfig:
    """
    Filter design defaults.

    stopband_attenuation_db / passband_ripple_db: targets for Kaiser designs.
    steepness: fraction of the band between passband edge and Nyquist that
    is NOT used for the transition band (0.85 -> 15% transition).
    max_filter_len: upper bound on designed filter length.
    target_rate_hz: output rate of the frame upsampler.
    """

    stopband_attenuation_db: float = 60.0
    passband_ripple_db: float = 0.1
    steepness: float = 0.85
    max_filter_len: int = 4096
    target_rate_hz: int = 48000

    def __post_init__(self) -> None:
        if not 0.0 < self.steepness < 1.0:
            raise ParameterError(f"steepness must be in (0, 1), got {self.steepness}")
        if self.max_filter_len < 1:
            raise ParameterError(f"max_filter_len must be >= 1, got {self.max_filter_len}")
        if self.target_rate_hz <= 0:
            raise ParameterError(f"target_rate_hz must be > 0, got {self.target_rate_hz}")

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "DSPConfig":
        """Build a config from a mapping, ignoring unknown keys."""
        kwargs: Dict[str, Any] = {}
        for f in fields(cls):
            if f.name in raw and raw[f.name] is not None:
                kwargs[f.name] = type(f.default)(raw[f.name])
        return cls(**kwargs)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "DSPConfig":
        """Read ``MULTIRATE_DSP_<FIELD>`` overrides from the environment."""
        environ = os.environ if environ is None else environ
        raw = {}
        for f in fields(cls):
            value = environ.get(ENV_PREFIX + f.name.upper())
            if value:
                raw[f.name] = value
        return cls.from_mapping(raw)

    def to_mapping(self) -> Dict[str, Any]:
        return asdict(self)


DEFAULT_CONFIG = DSPConfig()
