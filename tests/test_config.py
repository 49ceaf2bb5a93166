"""
Tests for settings validation.
"""

import pytest

from leadprovider_api.app.core.config import POLICY_LENIENT, POLICY_STRICT, Settings, settings


@pytest.mark.parametrize("value", ["strcit", "", "loose", "pending"])
def test_unknown_status_policy_fails_fast(value):
    with pytest.raises(ValueError, match="ORDER_STATUS_POLICY"):
        Settings(order_status_policy=value)


@pytest.mark.parametrize(
    "value, expected",
    [("strict", POLICY_STRICT), (" STRICT ", POLICY_STRICT), ("Lenient", POLICY_LENIENT)],
)
def test_status_policy_is_normalised(value, expected):
    assert Settings(order_status_policy=value).order_status_policy == expected


def test_loaded_settings_carry_a_known_policy():
    assert settings.order_status_policy in (POLICY_LENIENT, POLICY_STRICT)
