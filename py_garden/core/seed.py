"""
Seed selection for the garden's random stream.

A garden is keyed by a stable identity string (an opaque user id from the
auth provider). Without one, the feature vector itself is fingerprinted,
so two anonymous users with identical taste get identical gardens.
"""

from typing import Optional

from .alea_prng import AleaPRNG
from .features import FEATURE_NAMES, FeatureVector


def feature_fingerprint(features: FeatureVector) -> str:
    """Concatenate the feature values into a seed string."""
    return ":".join(repr(float(getattr(features, name))) for name in FEATURE_NAMES)


def resolve_seed(identity: Optional[str], features: FeatureVector) -> str:
    """
    Pick the seed for a garden.

    Args:
        identity: Stable user identity, if the auth layer provided one
        features: Feature vector used for the fingerprint fallback

    Returns:
        Seed string
    """
    if identity is not None:
        identity = str(identity).strip()
        if identity:
            return identity
    return feature_fingerprint(features)


def create_stream(seed: str) -> AleaPRNG:
    """
    Create a fresh Alea stream for a seed.

    Each garden owns its own stream; nothing is shared between sessions.
    """
    return AleaPRNG(seed)
