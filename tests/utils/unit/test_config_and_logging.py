"""
Unit tests for startup config validation and log secret masking.
"""

import logging
from types import SimpleNamespace

import pytest

from enums.runtime_environment import RuntimeEnvironment
from utils.config_validator import ConfigValidationError, validate_or_exit, validate_startup_config
from utils.logging_config import SecretMaskingFilter


def make_config(**overrides) -> SimpleNamespace:
    values = dict(
        RUNTIME_ENVIRONMENT=RuntimeEnvironment.PROD,
        DB_URL="sqlite+aiosqlite:///data/store.db",
        WEB_PORT=8000,
        REDIS_PORT=6379,
        AUTH_SESSION_DAYS=3,
        SENDGRID_API_KEY="SG.key",
        SENDGRID_STATUS_TEMPLATE_ID="d-template",
    )
    values.update(overrides)
    return SimpleNamespace(**values)


class TestConfigValidator:

    def test_valid(self):
        validate_startup_config(make_config())

    @pytest.mark.parametrize("overrides", [
        {"DB_URL": ""},
        {"WEB_PORT": 0},
        {"REDIS_PORT": 70000},
        {"AUTH_SESSION_DAYS": 0},
        {"SENDGRID_API_KEY": ""},
        {"SENDGRID_STATUS_TEMPLATE_ID": ""},
    ])
    def test_invalid(self, overrides):
        with pytest.raises(ConfigValidationError):
            validate_startup_config(make_config(**overrides))

    def test_mail_settings_optional_outside_prod(self):
        validate_startup_config(make_config(RUNTIME_ENVIRONMENT=RuntimeEnvironment.DEV, SENDGRID_API_KEY=""))

    def test_exit_on_failure(self):
        with pytest.raises(SystemExit) as exc_info:
            validate_or_exit(make_config(DB_URL=""))

        assert exc_info.value.code == 1


class TestSecretMaskingFilter:

    @staticmethod
    def masked(msg: str, *args) -> str:
        record = logging.LogRecord("test", logging.INFO, __file__, 1, msg, args or None, None)
        SecretMaskingFilter().filter(record)
        return record.getMessage()

    @pytest.mark.parametrize("message,expected", [
        ("Sending with SG.abcdefghijkl.mnopqrstuvwx", "Sending with [REDACTED_API_KEY]"),
        ("Authorization: Bearer abc.def-123", "Authorization: Bearer [REDACTED_BEARER_TOKEN]"),
        ("password=hunter22", "password=[REDACTED_PASSWORD]"),
        ("Order for lisa@example.com", "Order for [REDACTED_EMAIL]"),
        ("Call +971 50 123 4567 today", "Call [REDACTED_PHONE] today"),
    ])
    def test_message_masking(self, message, expected):
        assert self.masked(message) == expected

    def test_args_masking(self):
        assert self.masked("Status email to %s", "lisa@example.com") == "Status email to [REDACTED_EMAIL]"

    def test_plain_message_untouched(self):
        assert self.masked("Order a1b2 placed (Items: 2, Total: 380.00)") == "Order a1b2 placed (Items: 2, Total: 380.00)"
