from __future__ import annotations

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Mapping, Optional

from linbra.io import dump_yaml, load_yaml

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ToleranceConfig:
    """
    Default tolerances for approximate comparisons.

    Equality (`==`) on vectors and matrices is always exact. These values are
    only used by `allclose`, which follows `numpy.allclose`:

        |a - b| <= atol + rtol * |b|

    Parameters
    ----------
    rtol
        Relative tolerance.
    atol
        Absolute tolerance.
    """
    rtol: float = 1e-9
    atol: float = 1e-12

    def validate(self) -> None:
        if not float(self.rtol) >= 0:
            raise ValueError(f"tolerance.rtol must be >= 0, got {self.rtol}.")
        if not float(self.atol) >= 0:
            raise ValueError(f"tolerance.atol must be >= 0, got {self.atol}.")

    def to_dict(self) -> dict[str, Any]:
        return {"rtol": float(self.rtol), "atol": float(self.atol)}

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "ToleranceConfig":
        cfg = cls(
            rtol=float(d.get("rtol", 1e-9)),
            atol=float(d.get("atol", 1e-12)),
        )
        cfg.validate()
        return cfg


@dataclass(frozen=True, slots=True)
class DisplayConfig:
    """
    Formatting of `str(vector)` and `str(matrix)`.

    Parameters
    ----------
    precision
        Number of digits printed after the decimal point for floats.
    suppress_small
        If True, floats very close to zero are printed as zero.
    max_line_width
        Maximum characters per printed line before wrapping.

    Notes
    -----
    `repr` is not affected: it always prints every component in full so that
    it can be pasted back as a constructor call.
    """
    precision: int = 8
    suppress_small: bool = True
    max_line_width: int = 120

    def validate(self) -> None:
        if int(self.precision) < 0:
            raise ValueError(f"display.precision must be >= 0, got {self.precision}.")
        if int(self.max_line_width) < 10:
            raise ValueError(f"display.max_line_width must be >= 10, got {self.max_line_width}.")

    def to_dict(self) -> dict[str, Any]:
        return {
            "precision": int(self.precision),
            "suppress_small": bool(self.suppress_small),
            "max_line_width": int(self.max_line_width),
        }

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "DisplayConfig":
        cfg = cls(
            precision=int(d.get("precision", 8)),
            suppress_small=bool(d.get("suppress_small", True)),
            max_line_width=int(d.get("max_line_width", 120)),
        )
        cfg.validate()
        return cfg


@dataclass(frozen=True, slots=True)
class LinbraConfig:
    """
    Library-wide defaults.

    YAML schema
    -----------
        linbra:
          tolerance:
            rtol: 1.0e-09
            atol: 1.0e-12
          display:
            precision: 8
            suppress_small: true
            max_line_width: 120
    """
    tolerance: ToleranceConfig = field(default_factory=ToleranceConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)

    def validate(self) -> None:
        self.tolerance.validate()
        self.display.validate()

    def to_dict(self) -> dict[str, Any]:
        return {
            "tolerance": self.tolerance.to_dict(),
            "display": self.display.to_dict(),
        }

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "LinbraConfig":
        cfg = cls(
            tolerance=ToleranceConfig.from_dict(d.get("tolerance", {})),
            display=DisplayConfig.from_dict(d.get("display", {})),
        )
        cfg.validate()
        return cfg

    @classmethod
    def build(
        cls,
        *,
        rtol: float = 1e-9,
        atol: float = 1e-12,
        precision: int = 8,
        suppress_small: bool = True,
        max_line_width: int = 120,
    ) -> "LinbraConfig":
        """
        Convenience constructor avoiding nested dataclasses.

        Returns
        -------
        LinbraConfig
            Validated configuration instance.
        """
        cfg = cls(
            tolerance=ToleranceConfig(rtol=float(rtol), atol=float(atol)),
            display=DisplayConfig(
                precision=int(precision),
                suppress_small=bool(suppress_small),
                max_line_width=int(max_line_width),
            ),
        )
        cfg.validate()
        return cfg

    def to_yaml(self, path: str) -> None:
        dump_yaml({"linbra": self.to_dict()}, path)

    @classmethod
    def from_yaml(cls, path: str) -> "LinbraConfig":
        d = load_yaml(path)
        try:
            return cls.from_dict(d["linbra"])
        except KeyError as e:
            raise KeyError("The specified YAML file does not contain a field called 'linbra'") from e


_CONFIG: ContextVar[LinbraConfig] = ContextVar("linbra_config", default=LinbraConfig())


def get_config() -> LinbraConfig:
    """Return the defaults in effect for the current thread or task."""
    return _CONFIG.get()


def _resolve(config: Optional[LinbraConfig], overrides: Mapping[str, Any]) -> LinbraConfig:
    if config is None:
        previous = _CONFIG.get()
        current: Dict[str, Any] = {**previous.tolerance.to_dict(), **previous.display.to_dict()}
        current.update(overrides)
        return LinbraConfig.build(**current)
    if overrides:
        raise TypeError("Pass either a LinbraConfig or keyword overrides, not both.")
    config.validate()
    return config


def set_config(config: Optional[LinbraConfig] = None, **overrides: Any) -> LinbraConfig:
    """
    Replace the defaults for the current context and return the previous ones.

    Either pass a full `LinbraConfig`, or keyword overrides accepted by
    `LinbraConfig.build` (unspecified fields keep their current value).

    The defaults live in a `contextvars.ContextVar`: a new thread starts from
    `LinbraConfig()` and never sees changes made in another thread.
    """
    previous = _CONFIG.get()
    config = _resolve(config, overrides)
    _CONFIG.set(config)
    logger.debug("linbra configuration set to %s", config.to_dict())
    return previous


@contextmanager
def using_config(config: Optional[LinbraConfig] = None, **overrides: Any) -> Iterator[LinbraConfig]:
    """
    Temporarily change the defaults of the current context inside a `with` block.

        with using_config(precision=3):
            print(m)
    """
    config = _resolve(config, overrides)
    token = _CONFIG.set(config)
    try:
        yield config
    finally:
        _CONFIG.reset(token)
