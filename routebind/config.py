"""
ROUTEBIND Configuration

Central configuration for route binding defaults.
"""

import os
import logging
from pathlib import Path
from typing import Optional, Type

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

ENV_PREFIX = 'ROUTEBIND_'
VALID_LOG_LEVELS = {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}


class Config:
    """
    Binding configuration settings.

    Organized into:
    - Internal: ROUTEBIND internals (DO NOT MODIFY)
    - Env: Environment file configuration
    - User Settings: Configurable by developers

    Usage:
        class AppConfig(Config):
            SCOPED_BINDINGS = True
            DATABASE_URL = "sqlite:///./app.db"

        set_config(AppConfig.load_from_env())
    """

    class Internal:
        """
        ROUTEBIND Internal Configuration

        WARNING: THESE SETTINGS ARE PROTECTED AND CANNOT BE MODIFIED.
        """
        # Route pattern placeholders: {name} or {name:field}
        PLACEHOLDER_PATTERN = r"\{(?P<name>[A-Za-z_][A-Za-z0-9_]*)(?::(?P<field>[A-Za-z_][A-Za-z0-9_]*))?\}"
        SEGMENT_PATTERN = r"[^/]+"

        # Lookup method names on UrlRoutable
        BINDING_METHOD = "resolve_route_binding"
        CHILD_BINDING_METHOD = "resolve_child_route_binding"
        SOFT_DELETABLE_BINDING_METHOD = "resolve_soft_deletable_route_binding"
        SOFT_DELETABLE_CHILD_BINDING_METHOD = "resolve_soft_deletable_child_route_binding"

    class Env:
        """Environment file configuration"""
        file = ".env"  # Path to .env file (can be ".env.prod", ".env.dev", etc.)
        auto_load = True  # Automatically load .env file
        override = True  # Override existing environment variables

    # User-Configurable Settings
    # ============================

    # Binding Behavior (route-level defaults, each Route may override)
    SCOPED_BINDINGS = False  # Scope child bindings to the preceding parent
    ALLOW_TRASHED_BINDINGS = False  # Let soft-deleted records bind
    DEFAULT_ROUTE_KEY = "id"  # Column used by Model lookups without a binding field

    # Logging
    VERBOSE_LOGGING = False
    LOG_LEVEL = "INFO"  # Logging level: DEBUG, INFO, WARNING, ERROR, CRITICAL

    # Database Configuration
    DATABASE_URL = None  # Database connection URL (optional)
    DATABASE_ECHO = False  # Log all SQL statements

    # HTTP boundary
    NOT_FOUND_STATUS = 404  # Status used by adapters for binding failures

    def __init_subclass__(cls, **kwargs):
        """
        Validate that child classes don't override FINAL attributes.

        This hook is called automatically when a class inherits from Config.
        """
        super().__init_subclass__(**kwargs)

        if 'Internal' in cls.__dict__:
            raise TypeError(
                f"Cannot override Config.Internal in {cls.__name__}. "
                "Config.Internal contains framework-critical settings."
            )

    @staticmethod
    def _parse_env_value(env_value: str):
        """Auto-detect type of an environment value."""
        lowered = env_value.lower()

        # Handle explicit empty values (null, none, empty)
        if lowered in ('null', 'none', '~', ''):
            return None

        # Boolean detection
        if lowered in ('true', 'false', 'yes', 'no', 'on', 'off'):
            return lowered in ('true', 'yes', 'on')

        # Integer detection (handle negative numbers too)
        if env_value.lstrip('-').isdigit():
            return int(env_value)

        # List detection (comma-separated values)
        if ',' in env_value:
            return [item.strip() for item in env_value.split(',') if item.strip()]

        return env_value

    @classmethod
    def load_from_env(cls, env_file: Optional[str] = None):
        """
        Load configuration from .env file and environment variables.

        All environment variables must be prefixed with ROUTEBIND_*

        This method:
        1. Loads .env file (if it exists)
        2. Maps ROUTEBIND_* environment variables to Config attributes
        3. Handles type conversion (bool, int, lists)

        Args:
            env_file: Path to .env file (overrides Config.Env.file)

        Example .env file:
            ROUTEBIND_SCOPED_BINDINGS=true
            ROUTEBIND_ALLOW_TRASHED_BINDINGS=false
            ROUTEBIND_DEFAULT_ROUTE_KEY=uuid
            ROUTEBIND_LOG_LEVEL=DEBUG
            ROUTEBIND_DATABASE_URL=sqlite:///./app.db

        Example usage:
            Config.load_from_env()  # Uses Config.Env.file
            Config.load_from_env(".env.prod")  # Custom file
        """
        env_path = Path(env_file or cls.Env.file)

        if cls.Env.auto_load:
            if env_path.exists():
                load_dotenv(env_path, override=cls.Env.override)
                if cls.VERBOSE_LOGGING:
                    logger.info(f"Loaded environment from: {env_path}")
            elif cls.VERBOSE_LOGGING:
                logger.info(f".env file not found: {env_path}")

        for env_key, env_value in os.environ.items():
            # Only process ROUTEBIND_* prefixed variables
            if not env_key.startswith(ENV_PREFIX):
                continue

            attr_name = env_key[len(ENV_PREFIX):]

            if attr_name in ('Internal', 'Env') or attr_name.startswith('_'):
                logger.warning(f"Cannot override internal setting: {env_key}")
                continue

            parsed_value = cls._parse_env_value(env_value)

            if attr_name == 'LOG_LEVEL':
                if not isinstance(parsed_value, str) or parsed_value.upper() not in VALID_LOG_LEVELS:
                    logger.warning(
                        f"Invalid LOG_LEVEL: {env_value}. "
                        f"Must be one of: {', '.join(sorted(VALID_LOG_LEVELS))}. "
                        f"Using default value."
                    )
                    continue
                parsed_value = parsed_value.upper()

            setattr(cls, attr_name, parsed_value)

            if cls.VERBOSE_LOGGING:
                logger.info(f"Auto-set {attr_name} = {parsed_value} (from {env_key})")

        return cls

    @classmethod
    def validate(cls) -> bool:
        """
        Validate configuration settings.

        Returns:
            True if configuration is valid

        Raises:
            ValueError: If a setting is out of range
        """
        if cls.LOG_LEVEL.upper() not in VALID_LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of: {', '.join(sorted(VALID_LOG_LEVELS))}")

        if not isinstance(cls.DEFAULT_ROUTE_KEY, str) or not cls.DEFAULT_ROUTE_KEY:
            raise ValueError("DEFAULT_ROUTE_KEY must be a non-empty string")

        if not (100 <= int(cls.NOT_FOUND_STATUS) <= 599):
            raise ValueError(f"NOT_FOUND_STATUS must be an HTTP status code, got {cls.NOT_FOUND_STATUS}")

        return True


class DevConfig(Config):
    """Development configuration with helpful defaults."""

    class Env:
        """Development environment configuration"""
        file = ".env.dev"
        auto_load = True
        override = True

    VERBOSE_LOGGING = True
    LOG_LEVEL = "DEBUG"
    DATABASE_ECHO = True


class ProdConfig(Config):
    """Production configuration."""

    class Env:
        """Production environment configuration"""
        file = ".env.prod"
        auto_load = True
        override = False  # Don't override system env vars in production

    VERBOSE_LOGGING = False
    LOG_LEVEL = "WARNING"
    SCOPED_BINDINGS = True


# Active configuration
_active_config: Type[Config] = Config


def get_config() -> Type[Config]:
    """Return the configuration class currently in effect."""
    return _active_config


def set_config(config: Type[Config]) -> Type[Config]:
    """
    Make *config* the configuration in effect for new Routes and Models.

    Returns the previously active configuration so callers can restore it.
    """
    global _active_config
    if not (isinstance(config, type) and issubclass(config, Config)):
        raise TypeError(f"Expected a Config subclass, got {config!r}")
    previous, _active_config = _active_config, config
    return previous


# Default configuration
DEFAULT_CONFIG = Config
