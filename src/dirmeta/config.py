# Licensed under the Apache License, Version 2.0
"""
Feature toggles.

Each feature adds or removes API surface; none of them changes how a tree
is traversed.
"""

from __future__ import annotations

import os
from typing import Iterable, Optional, Union

from .domain.errors import ConfigurationError, FeatureDisabledError

FEATURES_ENV = "DIRMETA_FEATURES"

FEATURES: frozenset[str] = frozenset(
    {"time", "size", "file-type", "sync", "async", "watcher"}
)
DEFAULT_FEATURES: frozenset[str] = FEATURES - {"watcher"}


def parse_features(enable: Optional[Union[str, Iterable[str]]]) -> frozenset[str]:
    """
    Normalise a comma-separated string (or iterable) of feature names.
    Raises ConfigurationError if an unknown name is given.
    """
    if enable is None:
        return frozenset()
    items = enable.split(",") if isinstance(enable, str) else list(enable)
    parts = {p.strip().lower() for p in items if p and p.strip()}
    unknown = parts - FEATURES
    if unknown:
        raise ConfigurationError(
            f"Unknown feature(s): {', '.join(sorted(unknown))}. "
            f"Valid options: {', '.join(sorted(FEATURES))}"
        )
    return frozenset(parts)


def resolve_features(
    enable: Optional[Union[str, Iterable[str]]] = None,
) -> frozenset[str]:
    """Explicit value first, then $DIRMETA_FEATURES, then the defaults."""
    if enable is not None:
        return parse_features(enable)
    from_env = os.getenv(FEATURES_ENV)
    if from_env is not None:
        return parse_features(from_env)
    return DEFAULT_FEATURES


def require(features: frozenset[str], feature: str) -> None:
    if feature not in features:
        raise FeatureDisabledError(feature)
