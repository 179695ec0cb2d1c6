"""
Listening-taste feature vectors.

A garden is driven by eight aggregate audio features averaged over a
user's recent tracks. Every field has a neutral default so generation
can proceed when the aggregation service returns nothing, or only part
of a record.
"""

import math
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Tuple, Union

import structlog

logger = structlog.get_logger()


@dataclass(frozen=True)
class FeatureVector:
    """Eight scalar features describing aggregate listening taste."""

    acousticness: float = 0.33  # tree density
    danceability: float = 0.57  # wave frequency, speed and height
    energy: float = 0.56  # terrain height
    instrumentalness: float = 0.0
    liveness: float = 0.16  # firefly density
    loudness: float = -8.6  # island radius (dB, roughly -60..0)
    tempo: float = 128.0  # BPM
    valence: float = 0.405  # cold/warm palette blend

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "FeatureVector":
        """
        Build a vector from a JSON-like mapping.

        Missing, null or non-numeric fields fall back to the documented
        default for that field. Values are taken as-is, without clamping.
        """
        values = {}
        for name in FEATURE_NAMES:
            value = _as_float(data.get(name))
            if value is not None:
                values[name] = value
        return cls(**values)

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)

    def as_tuple(self) -> Tuple[float, ...]:
        return tuple(getattr(self, name) for name in FEATURE_NAMES)

    def with_values(self, **changes: float) -> "FeatureVector":
        """Return a copy with some fields replaced."""
        return replace(self, **changes)


FEATURE_NAMES: Tuple[str, ...] = tuple(f.name for f in fields(FeatureVector))

DEFAULT_FEATURES = FeatureVector()


def _as_float(value: Any) -> Optional[float]:
    """Read a finite float, or None when the value is unusable."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def resolve_features(data: Optional[Union[FeatureVector, Mapping[str, Any]]]) -> FeatureVector:
    """Turn whatever the upstream service produced into a FeatureVector."""
    if data is None:
        return DEFAULT_FEATURES
    if isinstance(data, FeatureVector):
        return data
    return FeatureVector.from_mapping(data)


def average_features(audio_features: Iterable[Mapping[str, Any]]) -> Optional[FeatureVector]:
    """
    Average per-track audio features into a single vector.

    A field that is missing or falsy on a track counts as 0 for that
    track, so sparse records pull the mean toward zero rather than being
    skipped. Entries that are not mappings are dropped. Returns None when
    no usable track remains.
    """
    totals = {name: 0.0 for name in FEATURE_NAMES}
    count = 0

    for track in audio_features:
        # Tracks the upstream service could not analyse come back as null
        if not isinstance(track, Mapping):
            continue
        count += 1
        for name in FEATURE_NAMES:
            totals[name] += _as_float(track.get(name)) or 0.0

    if count == 0:
        return None

    return FeatureVector(**{name: total / count for name, total in totals.items()})


FeatureFetcher = Callable[[], Any]


def load_features(fetch: Optional[FeatureFetcher]) -> FeatureVector:
    """
    Fetch features from the aggregation service, falling back to defaults.

    The fetcher may return a single feature mapping, a list of per-track
    feature mappings (averaged here), or nothing at all.
    """
    if fetch is None:
        logger.info("No feature source configured, using defaults")
        return DEFAULT_FEATURES

    try:
        data = fetch()
    except Exception as e:
        logger.warning("Feature source unavailable, using defaults", error=str(e))
        return DEFAULT_FEATURES

    if isinstance(data, FeatureVector):
        return data

    if isinstance(data, Mapping):
        if not data:
            logger.warning("Feature source returned an empty record, using defaults")
        return resolve_features(data)

    if data is None:
        logger.warning("Feature source returned nothing, using defaults")
        return DEFAULT_FEATURES

    if not isinstance(data, (list, tuple)):
        logger.warning("Feature source returned an unexpected payload, using defaults", payload_type=type(data).__name__)
        return DEFAULT_FEATURES

    averaged = average_features(data)
    if averaged is None:
        logger.warning("Feature source returned no tracks, using defaults")
        return DEFAULT_FEATURES

    logger.debug("Averaged track features", features=averaged.as_dict())
    return averaged
