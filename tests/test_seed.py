"""Tests for seed selection."""

from py_garden.core.features import DEFAULT_FEATURES
from py_garden.core.seed import create_stream, feature_fingerprint, resolve_seed


class TestResolveSeed:
    """Test identity and fingerprint seeding."""

    def test_identity_wins(self):
        assert resolve_seed("user-123", DEFAULT_FEATURES) == "user-123"

    def test_identity_is_stripped(self):
        assert resolve_seed("  user-123\n", DEFAULT_FEATURES) == "user-123"

    def test_missing_identity_uses_fingerprint(self):
        expected = feature_fingerprint(DEFAULT_FEATURES)
        assert resolve_seed(None, DEFAULT_FEATURES) == expected
        assert resolve_seed("", DEFAULT_FEATURES) == expected
        assert resolve_seed("   ", DEFAULT_FEATURES) == expected

    def test_identical_features_share_fingerprint(self):
        """Anonymous users with identical taste get the same seed."""
        a = DEFAULT_FEATURES.with_values(energy=0.7)
        b = DEFAULT_FEATURES.with_values(energy=0.7)
        assert feature_fingerprint(a) == feature_fingerprint(b)

    def test_fingerprint_changes_with_features(self):
        changed = DEFAULT_FEATURES.with_values(valence=0.9)
        assert feature_fingerprint(changed) != feature_fingerprint(DEFAULT_FEATURES)

    def test_fingerprint_format(self):
        parts = feature_fingerprint(DEFAULT_FEATURES).split(":")
        assert len(parts) == 8
        assert parts[0] == "0.33"
        assert parts[5] == "-8.6"


class TestCreateStream:
    def test_fresh_stream_per_call(self):
        a = create_stream("garden")
        a.random()
        b = create_stream("garden")

        assert b.call_count == 0
        assert b.random() == create_stream("garden").random()
