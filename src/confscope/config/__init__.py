"""Scoped INI configuration

Keys may be scoped to an environment, an instance, or both; loading a file
for a given environment and instance keeps the most specific definition of
every key.

Example:
    from confscope.config import parse_config

    root = parse_config("service.ini", environment="prod", instance=2)
    timeout = root.get_as_int("timeout", 30)
    db = root.get_last_section("database")
    host = db.get_as_string("host")
"""

from confscope.config.env_loader import EnvLoader
from confscope.config.key import ConfigKey
from confscope.config.loader import (
    ENV_KEY,
    INSTANCE_KEY,
    ROOT_SECTION_NAME,
    ConfigTreeBuilder,
    parse_config,
    parse_config_stream,
)
from confscope.config.section import ConfigItem, ConfigSection, to_structured_value
from confscope.config.settings import LoaderSettings, require_env

__all__ = [
    # Keys and tree
    "ConfigKey",
    "ConfigItem",
    "ConfigSection",
    "to_structured_value",
    # Loading
    "ConfigTreeBuilder",
    "parse_config",
    "parse_config_stream",
    "ROOT_SECTION_NAME",
    "ENV_KEY",
    "INSTANCE_KEY",
    # Settings
    "EnvLoader",
    "LoaderSettings",
    "require_env",
]
