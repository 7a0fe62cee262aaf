"""Loader settings resolved from the environment.

Tools that load configuration (the CLI, service entry points) need to know
which environment and instance to load for. LoaderSettings collects those
from ``{prefix}_*`` variables, a .env file and explicit overrides.

Environment variables (default prefix CONFSCOPE):
    CONFSCOPE_ENV: Target environment (default: dev)
    CONFSCOPE_INSTANCE: Target instance number (default: 0)
    CONFSCOPE_CONFIG_FILE: Path of the INI file to load (optional)
"""

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Union

from confscope.config.env_loader import EnvLoader
from confscope.config.loader import parse_config
from confscope.config.section import ConfigSection
from confscope.exceptions import ConfigurationError, InvalidConfigurationError
from confscope.logger import Logger

DEFAULT_PREFIX = "CONFSCOPE"
DEFAULT_ENVIRONMENT = "dev"
DEFAULT_INSTANCE = 0


def require_env(varname: str) -> str:
    """Read an environment variable that must be defined.

    Raises:
        ConfigurationError: If the variable is not set
    """
    value = os.environ.get(varname)
    if value is None:
        raise ConfigurationError(
            "MISSING_ENV_VAR",
            f"environment variable '{varname}' not defined",
            {"variable": varname},
        )
    return value


@dataclass
class LoaderSettings:
    """Target of a configuration load

    Attributes:
        environment: Environment to load for
        instance: Instance number to load for
        config_file: INI file to load (optional)
    """

    environment: str = DEFAULT_ENVIRONMENT
    instance: int = DEFAULT_INSTANCE
    config_file: Optional[Path] = None

    def __post_init__(self):
        """Validate settings"""
        if not self.environment:
            raise InvalidConfigurationError("config environment cannot be empty")
        if self.instance < 0:
            raise InvalidConfigurationError(
                "config instance cannot be negative", {"instance": self.instance}
            )

        if isinstance(self.config_file, str):
            self.config_file = Path(self.config_file)

    @classmethod
    def from_env(
        cls,
        prefix: str = DEFAULT_PREFIX,
        env_file: Optional[Union[Path, str]] = None,
        overrides: Optional[Mapping[str, str]] = None,
    ) -> "LoaderSettings":
        """Load settings from environment variables

        Args:
            prefix: Environment variable prefix
            env_file: Optional .env file (defaults to ./.env when present)
            overrides: Explicit values, keyed like the environment variables

        Raises:
            InvalidConfigurationError: If {prefix}_INSTANCE is not a non-negative integer
                or {prefix}_ENV is empty
        """
        values = EnvLoader(env_file).load_prefixed(prefix, overrides)

        raw_instance = values.get("INSTANCE", str(DEFAULT_INSTANCE)).strip()
        if not re.fullmatch(r"[0-9]+", raw_instance):
            raise InvalidConfigurationError(
                f"{prefix}_INSTANCE must be a non-negative integer",
                {"value": raw_instance},
            )

        config_file = values.get("CONFIG_FILE")
        return cls(
            environment=values.get("ENV", DEFAULT_ENVIRONMENT),
            instance=int(raw_instance),
            config_file=Path(config_file) if config_file else None,
        )

    def load(self, filename: Optional[Union[Path, str]] = None,
             logger: Optional[Logger] = None) -> ConfigSection:
        """Load the configured file (or ``filename``) for these settings

        Raises:
            InvalidConfigurationError: If no file was given or configured
        """
        path = filename or self.config_file
        if path is None:
            raise InvalidConfigurationError("no configuration file given")
        return parse_config(path, self.environment, self.instance, logger=logger)
