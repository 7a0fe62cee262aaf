"""Load an INI file into a ConfigSection tree for one environment and instance.

A single file can describe every deployment:

    timeout = 30
    prod.timeout = 60
    prod.2.timeout = 90

    [database]
    host = localhost
    prod.host = db.internal

Loading it for ("prod", 2) yields ``timeout = 90`` and ``database.host =
db.internal``; keys scoped to any other environment or instance are skipped.
After the file is read the root receives two extra keys, ``env`` and
``instance``, recording what the load was performed for.
"""

import os
from typing import Callable, Optional, TextIO, Union

from confscope.config.key import ConfigKey
from confscope.config.section import ConfigSection
from confscope.exceptions import (
    ConfigParseError,
    ConfscopeError,
    DuplicateKeyError,
    InvalidConfigurationError,
    MalformedKeyError,
    ReservedKeyError,
    SectionNotFoundError,
)
from confscope.ini import EntryHandler, tokenize_file, tokenize_stream
from confscope.logger import Logger, get_logger

ROOT_SECTION_NAME = "root"
ENV_KEY = "env"
INSTANCE_KEY = "instance"

logger = get_logger()


class ConfigTreeBuilder:
    """Applies tokenizer entries to a section tree.

    One builder serves one load. Its ``handle`` method is the callback
    passed to the tokenizer.
    """

    def __init__(self, environment: str, instance: int, logger: Logger):
        if not environment:
            raise InvalidConfigurationError("config environment cannot be empty")
        if instance < 0:
            raise InvalidConfigurationError(
                "config instance cannot be negative", {"instance": instance}
            )
        self.environment = environment
        self.instance = instance
        self.root = ConfigSection(ROOT_SECTION_NAME)
        self._logger = logger
        self.skipped = 0

    def _target_section(self, section: str) -> ConfigSection:
        if not section:
            return self.root
        try:
            return self.root.get_last_section(section)
        except SectionNotFoundError:
            created = ConfigSection(section)
            self.root.add_section(created)
            return created

    def _in_scope(self, key: ConfigKey) -> bool:
        if key.env is not None and key.env != self.environment:
            return False
        if key.instance is not None and key.instance != self.instance:
            return False
        return True

    def handle(self, section: str, name: str, value: str) -> None:
        """Apply one (section, key, value) entry.

        Raises:
            ConfigParseError: If the key is malformed or collides with an
                equally precise definition
        """
        target = self._target_section(section)
        try:
            key = ConfigKey.parse(name)
            if not self._in_scope(key):
                self.skipped += 1
                self._logger.debug(
                    "Skipping out of scope key", section=section, key=name
                )
                return
            target.add_key(key, value)
        except (MalformedKeyError, DuplicateKeyError) as e:
            raise ConfigParseError(
                f"config parse failed for key=[{name}] value=[{value}] : {e.message}",
                details={
                    "section": section,
                    "key": name,
                    "value": value,
                    "cause": e.code,
                },
            ) from e

    def _auto_key(self, name: str, value: str) -> None:
        if self.root.has_key(name):
            raise ReservedKeyError(name)
        self.root.add_key(ConfigKey(self.environment, self.instance, name), value)

    def finish(self) -> ConfigSection:
        """Inject the env/instance keys and hand over the finished tree.

        Raises:
            ReservedKeyError: If the file already defined ``env`` or ``instance``
        """
        self._auto_key(ENV_KEY, self.environment)
        self._auto_key(INSTANCE_KEY, str(self.instance))
        return self.root


def _load(
    feed: Callable[[EntryHandler], None],
    environment: str,
    instance: int,
    log: Optional[Logger],
    source: str,
) -> ConfigSection:
    log = log or logger
    builder = ConfigTreeBuilder(environment, instance, log)
    try:
        feed(builder.handle)
        root = builder.finish()
    except ConfscopeError as e:
        log.error("Configuration load failed", source=source, error=str(e))
        raise
    log.debug(
        "Configuration loaded",
        source=source,
        env=environment,
        instance=instance,
        sections=len(root.sections()),
        skipped=builder.skipped,
    )
    return root


def parse_config_stream(
    stream: TextIO,
    environment: str,
    instance: int,
    source: str = "<stream>",
    logger: Optional[Logger] = None,
) -> ConfigSection:
    """Load configuration from an open text stream.

    Same semantics as parse_config; ``source`` names the stream in errors.
    """
    return _load(
        lambda handler: tokenize_stream(stream, handler, source),
        environment,
        instance,
        logger,
        source,
    )


def parse_config(
    filename: Union[str, "os.PathLike[str]"],
    environment: str,
    instance: int,
    logger: Optional[Logger] = None,
) -> ConfigSection:
    """Load an INI file for one environment and instance.

    Args:
        filename: Path of the INI file
        environment: Target environment; keys scoped to others are skipped
        instance: Target instance number; keys scoped to others are skipped
        logger: Optional logger; defaults to the module logger

    Returns:
        The root section, named "root"

    Raises:
        InvalidConfigurationError: If environment is empty
        ConfigFileError: If the file cannot be read or tokenized
        ConfigParseError: If an entry is malformed or ambiguous, or the
            file defines ``env``/``instance`` at the top level
    """
    path = os.fspath(filename)
    return _load(
        lambda handler: tokenize_file(path, handler),
        environment,
        instance,
        logger,
        path,
    )
