"""Process settings read from the environment once at import time.

Recognized variables:
    SKIPINK_UNDERLINE_METHOD: decoration strategy, either the integer
        (0 = straight, 1 = largest-gap, 2 = offset-mask) or its name.
    SKIPINK_FLATNESS: flattening tolerance in device units (> 0).
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from skipink.common import FLATNESS_TOLERANCE, DecorationStrategy

logger = logging.getLogger(__name__)

ENV_UNDERLINE_METHOD = "SKIPINK_UNDERLINE_METHOD"
ENV_FLATNESS = "SKIPINK_FLATNESS"


@dataclass(frozen=True)
class Settings:
    """Immutable engine settings.

    Attributes:
        underline_method: Strategy used when a caller does not name one.
        flatness: Default flattening tolerance for curves.
    """

    underline_method: DecorationStrategy = DecorationStrategy.OFFSET_MASK
    flatness: float = FLATNESS_TOLERANCE


def _parse_strategy(raw: Optional[str]) -> DecorationStrategy:
    if raw is None or not raw.strip():
        return Settings.underline_method
    try:
        return DecorationStrategy.parse(raw)
    except ValueError:
        logger.warning("Ignoring invalid %s=%r, using %s", ENV_UNDERLINE_METHOD, raw, Settings.underline_method.name)
        return Settings.underline_method


def _parse_flatness(raw: Optional[str]) -> float:
    if raw is None or not raw.strip():
        return Settings.flatness
    try:
        value = float(raw)
    except ValueError:
        value = -1.0
    if not value > 0.0:
        logger.warning("Ignoring invalid %s=%r, using %s", ENV_FLATNESS, raw, Settings.flatness)
        return Settings.flatness
    return value


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build settings from the given mapping (defaults to ``os.environ``).

    Invalid values fall back to the defaults and are logged as warnings.
    """
    env = os.environ if environ is None else environ
    return Settings(
        underline_method=_parse_strategy(env.get(ENV_UNDERLINE_METHOD)),
        flatness=_parse_flatness(env.get(ENV_FLATNESS)),
    )


SETTINGS: Settings = load_settings()


def main():
    """Print the active settings."""
    print(SETTINGS)


if __name__ == "__main__":
    main()
