"""Runtime switches choosing the real or mock data source per domain.

A FeatureFlags instance is created by the composition root and handed to
every service facade. Facades read it on each call, so a change made with
set() applies to the next call only.
"""
import os
from enum import Enum
from typing import Dict, Mapping, Optional, Union

from fyla.errors import UnknownFeatureFlagError
from fyla.logging_config import get_logger

logger = get_logger(__name__)


class FeatureFlag(str, Enum):
    """One flag per domain capability."""
    USE_REAL_CONTENT_API = "USE_REAL_CONTENT_API"
    USE_REAL_APPOINTMENT_API = "USE_REAL_APPOINTMENT_API"
    USE_REAL_PROVIDER_API = "USE_REAL_PROVIDER_API"
    USE_REAL_ANALYTICS_API = "USE_REAL_ANALYTICS_API"
    USE_REAL_BUSINESS_HOURS_API = "USE_REAL_BUSINESS_HOURS_API"
    USE_REAL_CHAT_API = "USE_REAL_CHAT_API"
    USE_REAL_SOCIAL_API = "USE_REAL_SOCIAL_API"
    USE_REAL_AUTH_API = "USE_REAL_AUTH_API"
    USE_REAL_BOOKING_API = "USE_REAL_BOOKING_API"


FlagName = Union[FeatureFlag, str]

ENV_PREFIX = "FYLA_"


def _resolve(name: FlagName) -> FeatureFlag:
    if isinstance(name, FeatureFlag):
        return name
    try:
        return FeatureFlag(str(name).upper())
    except ValueError:
        raise UnknownFeatureFlagError(name) from None


def _check_value(name: FlagName, value: bool) -> bool:
    if not isinstance(value, bool):
        raise TypeError(f"Feature flag {name} must be set to a bool, got {type(value).__name__}")
    return value


class FeatureFlags:
    """In-memory flag table; nothing is persisted."""

    def __init__(self, initial: Optional[Mapping[FlagName, bool]] = None, default: bool = True):
        """
        Args:
            initial: Explicit values for some flags
            default: Value for every flag not listed in initial
        """
        self._values: Dict[FeatureFlag, bool] = {flag: default for flag in FeatureFlag}
        for name, value in (initial or {}).items():
            self._values[_resolve(name)] = _check_value(name, value)

    def get(self, name: FlagName) -> bool:
        return self._values[_resolve(name)]

    def set(self, name: FlagName, value: bool) -> None:
        """
        Raises:
            UnknownFeatureFlagError: If the name is not a registered flag
            TypeError: If value is not a bool
        """
        flag = _resolve(name)
        _check_value(flag.value, value)
        previous = self._values[flag]
        self._values[flag] = value
        if previous != value:
            logger.info("feature_flag_changed", flag=flag.value, value=value)

    def snapshot(self) -> Dict[str, bool]:
        """Plain dict copy keyed by flag name."""
        return {flag.value: value for flag, value in self._values.items()}

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None, default: bool = True) -> "FeatureFlags":
        """
        Read initial values from FYLA_<FLAG> variables.

        Example: FYLA_USE_REAL_CHAT_API=false starts the chat domain on mock data.
        """
        env = os.environ if env is None else env
        initial: Dict[FlagName, bool] = {}
        for flag in FeatureFlag:
            raw = env.get(f"{ENV_PREFIX}{flag.value}")
            if raw is not None and raw.strip():
                initial[flag] = raw.strip().lower() in ("1", "true", "yes", "on")
        return cls(initial, default=default)

    def __repr__(self) -> str:
        return f"FeatureFlags({self.snapshot()!r})"
