"""Tests for feature flags."""
import pytest

from fyla.errors import UnknownFeatureFlagError
from fyla.feature_flags import FeatureFlag, FeatureFlags


class TestFeatureFlags:
    """Test the flag table."""

    def test_every_flag_defaults_to_real_api(self):
        flags = FeatureFlags()

        assert all(flags.snapshot().values())
        assert len(flags.snapshot()) == 9

    def test_initial_values_and_default(self):
        """Listed flags take their value, the rest take the default."""
        flags = FeatureFlags({FeatureFlag.USE_REAL_CHAT_API: True}, default=False)

        assert flags.get(FeatureFlag.USE_REAL_CHAT_API) is True
        assert flags.get(FeatureFlag.USE_REAL_CONTENT_API) is False

    def test_set_and_get_by_name(self):
        """Flags can be addressed by enum member or by string name."""
        flags = FeatureFlags()

        flags.set("use_real_content_api", False)

        assert flags.get(FeatureFlag.USE_REAL_CONTENT_API) is False
        assert flags.get("USE_REAL_CONTENT_API") is False

    def test_unknown_flag_raises(self):
        """Unknown flag names should raise instead of silently defaulting."""
        flags = FeatureFlags()

        with pytest.raises(UnknownFeatureFlagError):
            flags.get("USE_REAL_PAYMENTS_API")
        with pytest.raises(UnknownFeatureFlagError):
            flags.set("USE_REAL_PAYMENTS_API", True)
        with pytest.raises(KeyError):
            FeatureFlags({"NOPE": True})

    def test_non_bool_values_rejected(self):
        """A string such as "false" must not turn a flag on."""
        flags = FeatureFlags()
        flags.set(FeatureFlag.USE_REAL_CHAT_API, False)

        with pytest.raises(TypeError):
            flags.set("USE_REAL_CHAT_API", "false")
        with pytest.raises(TypeError):
            flags.set(FeatureFlag.USE_REAL_CHAT_API, 1)
        with pytest.raises(TypeError):
            FeatureFlags({FeatureFlag.USE_REAL_CHAT_API: "true"})

        assert flags.get(FeatureFlag.USE_REAL_CHAT_API) is False

    def test_snapshot_is_a_copy(self):
        flags = FeatureFlags()
        snapshot = flags.snapshot()

        snapshot["USE_REAL_CHAT_API"] = False

        assert flags.get(FeatureFlag.USE_REAL_CHAT_API) is True

    def test_from_env(self):
        """FYLA_<FLAG> variables set the initial state."""
        flags = FeatureFlags.from_env({
            "FYLA_USE_REAL_CHAT_API": "false",
            "FYLA_USE_REAL_SOCIAL_API": "0",
            "FYLA_USE_REAL_CONTENT_API": "yes",
            "FYLA_USE_REAL_ANALYTICS_API": "",
        })

        assert flags.get(FeatureFlag.USE_REAL_CHAT_API) is False
        assert flags.get(FeatureFlag.USE_REAL_SOCIAL_API) is False
        assert flags.get(FeatureFlag.USE_REAL_CONTENT_API) is True
        assert flags.get(FeatureFlag.USE_REAL_ANALYTICS_API) is True
