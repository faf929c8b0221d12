"""
Tests for configuration and key generation helpers.
"""
import re

import pytest

from src.core.config import EnvRecoveryConfig, StaticRecoveryConfig, env_flag
from src.core.security import constant_time_compare, new_recovery_key


class TestRecoveryConfig:
    """Tests for the recovery-mode switch."""

    @pytest.mark.parametrize("value", ["true", "TRUE", "True", " true "])
    def test_env_enabled(self, monkeypatch, value):
        monkeypatch.setenv("RECOVERY_MODE", value)
        assert EnvRecoveryConfig().recovery_mode_enabled() is True

    @pytest.mark.parametrize("value", ["false", "1", "yes", ""])
    def test_env_disabled(self, monkeypatch, value):
        monkeypatch.setenv("RECOVERY_MODE", value)
        assert EnvRecoveryConfig().recovery_mode_enabled() is False

    def test_env_unset(self, monkeypatch):
        monkeypatch.delenv("RECOVERY_MODE", raising=False)
        assert EnvRecoveryConfig().recovery_mode_enabled() is False

    def test_env_polled_on_each_call(self, monkeypatch):
        """Test that changing the variable takes effect without a restart."""
        config = EnvRecoveryConfig()
        monkeypatch.setenv("RECOVERY_MODE", "true")
        assert config.recovery_mode_enabled() is True

        monkeypatch.setenv("RECOVERY_MODE", "false")
        assert config.recovery_mode_enabled() is False

    def test_custom_variable(self, monkeypatch):
        monkeypatch.setenv("ADMIN_RESCUE", "true")
        assert EnvRecoveryConfig("ADMIN_RESCUE").recovery_mode_enabled() is True

    def test_static_config(self):
        config = StaticRecoveryConfig()
        assert config.recovery_mode_enabled() is False

        config.enabled = True
        assert config.recovery_mode_enabled() is True

    def test_env_flag_default(self, monkeypatch):
        monkeypatch.delenv("SOME_UNSET_FLAG", raising=False)
        assert env_flag("SOME_UNSET_FLAG", "true") is True


class TestSecurityHelpers:
    """Tests for recovery key generation and comparison."""

    def test_new_recovery_key_format(self):
        assert re.fullmatch(r"RK-[0-9A-F]{6}", new_recovery_key())

    def test_new_recovery_key_draws_three_bytes(self):
        requested = []

        def source(n):
            requested.append(n)
            return b"\x00\x0f\xa0"

        assert new_recovery_key(source) == "RK-000FA0"
        assert requested == [3]

    def test_constant_time_compare(self):
        assert constant_time_compare("RK-ABCDEF", "RK-ABCDEF") is True
        assert constant_time_compare("RK-ABCDEF", "RK-ABCDE0") is False
        assert constant_time_compare("RK-ABCDEF", "RK-ABC") is False
