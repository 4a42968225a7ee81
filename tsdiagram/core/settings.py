"""Converter settings read from the environment.

    TSDIAGRAM_MAX_REPORTED_ERRORS    diagnostics listed in the diagram header (5)
    TSDIAGRAM_SIMPLE_UNION_MAX       largest literal union rendered inline (5)
    TSDIAGRAM_SHOW_TYPE_PARAMETERS   render generics as ``class Box~T~`` (false)
    TSDIAGRAM_GENERIC_WRAPPERS       comma list of unwrapped wrapper generics
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional, Tuple

from .constants import DEFAULT_GENERIC_WRAPPERS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConverterSettings:
    """Knobs for one conversion run."""
    max_reported_errors: int = 5
    simple_union_max_members: int = 5
    show_type_parameters: bool = False
    generic_wrappers: Tuple[str, ...] = DEFAULT_GENERIC_WRAPPERS

    @classmethod
    def from_env(cls) -> "ConverterSettings":
        """Build settings from TSDIAGRAM_* environment variables."""
        defaults = cls()
        wrappers = os.getenv("TSDIAGRAM_GENERIC_WRAPPERS")
        return cls(
            max_reported_errors=_env_int("TSDIAGRAM_MAX_REPORTED_ERRORS", defaults.max_reported_errors),
            simple_union_max_members=_env_int("TSDIAGRAM_SIMPLE_UNION_MAX", defaults.simple_union_max_members),
            show_type_parameters=os.getenv("TSDIAGRAM_SHOW_TYPE_PARAMETERS", "false").lower() in ("1", "true", "yes"),
            generic_wrappers=(
                tuple(w.strip() for w in wrappers.split(",") if w.strip())
                if wrappers else defaults.generic_wrappers
            ),
        )


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning(f"Ignoring {name}={raw!r}: not an integer, using {default}")
        return default
    if value < 0:
        logger.warning(f"Ignoring {name}={raw!r}: negative, using {default}")
        return default
    return value


_settings: Optional[ConverterSettings] = None


def get_settings() -> ConverterSettings:
    """Process-wide settings, read from the environment on first use."""
    global _settings
    if _settings is None:
        _settings = ConverterSettings.from_env()
    return _settings


def reset_settings() -> None:
    """Forget cached settings so the next get_settings() re-reads the environment."""
    global _settings
    _settings = None
