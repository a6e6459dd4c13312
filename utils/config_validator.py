"""
Configuration Validation Module

Validates critical configuration values at startup to fail-fast
with clear error messages instead of runtime failures.
"""

import sys
from typing import Optional

from enums.runtime_environment import RuntimeEnvironment


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""
    pass


def validate_required_config(value: Optional[str], name: str, example: str = "") -> None:
    """
    Validate that a required config value is set.

    Args:
        value: The config value to check
        name: Name of the config variable
        example: Optional example value to show in error message

    Raises:
        ConfigValidationError: If value is missing
    """
    if not value:
        error_msg = f"{name} is required but not set!"
        if example:
            error_msg += f"\nAdd to .env: {name}={example}"
        raise ConfigValidationError(error_msg)


def validate_port(port: int, name: str) -> None:
    if not 0 < port < 65536:
        raise ConfigValidationError(f"{name} must be between 1 and 65535 (currently: {port})")


def validate_startup_config(config_module) -> None:
    """
    Validate all critical configuration at startup.

    Mail settings are only mandatory in production: in DEV/TEST the
    status email endpoint fails with a delivery error instead.

    Raises:
        ConfigValidationError: If any validation fails
    """
    validate_required_config(config_module.DB_URL, 'DB_URL', 'sqlite+aiosqlite:///data/store.db')
    validate_port(config_module.WEB_PORT, 'WEB_PORT')
    validate_port(config_module.REDIS_PORT, 'REDIS_PORT')

    if config_module.AUTH_SESSION_DAYS < 1:
        raise ConfigValidationError(
            f"AUTH_SESSION_DAYS must be at least 1 (currently: {config_module.AUTH_SESSION_DAYS})"
        )

    if config_module.RUNTIME_ENVIRONMENT == RuntimeEnvironment.PROD:
        validate_required_config(config_module.SENDGRID_API_KEY, 'SENDGRID_API_KEY', '<your-sendgrid-api-key>')
        validate_required_config(config_module.SENDGRID_STATUS_TEMPLATE_ID, 'SENDGRID_STATUS_TEMPLATE_ID',
                                 'd-<template-id>')


def validate_or_exit(config_module) -> None:
    """
    Validate configuration and exit with error code 1 if validation fails.

    This is the main entry point for startup validation.
    """
    try:
        validate_startup_config(config_module)
    except ConfigValidationError as e:
        print(f"\n ERROR: Configuration Validation Failed\n", file=sys.stderr)
        print(str(e), file=sys.stderr)
        print("\nStore startup aborted. Please fix configuration and try again.\n", file=sys.stderr)
        sys.exit(1)
