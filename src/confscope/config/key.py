"""Scoped configuration keys.

A key string has the shape ``[ENV.][INSTANCE.]NAME``:

    timeout              applies everywhere
    prod.timeout         only when loading for environment "prod"
    2.timeout            only when loading for instance 2
    prod.2.timeout       only for environment "prod", instance 2

The more segments a key carries, the higher its precision score and the
more it wins over other definitions of the same name.
"""

import re
from dataclasses import dataclass
from typing import Optional

from confscope.exceptions import MalformedKeyError

#  3    prod.100.key            HIGHEST
#  2         100.key
#  1    prod.key
#  0             key            LOWEST
ENV_WEIGHT = 1
INSTANCE_WEIGHT = 2

KEY_PATTERN = re.compile(
    r"(?:(?P<env>[A-Za-z_][^.]*)\.)?"
    r"(?:(?P<instance>[0-9]+)\.)?"
    r"(?P<name>[^.]+(?:\.[^.]+)*)"
)


@dataclass(frozen=True)
class ConfigKey:
    """Parsed key: optional environment, optional instance, base name.

    Attributes:
        env: Environment the key is scoped to, None for all environments
        instance: Instance the key is scoped to, None for all instances
        name: Base name used for lookup and collision detection
    """

    env: Optional[str]
    instance: Optional[int]
    name: str

    def __post_init__(self):
        if not self.name:
            raise MalformedKeyError(self.to_string(), "config key missing name segment")
        if self.env is not None and not self.env:
            raise MalformedKeyError(self.to_string(), "config key has empty environment")
        if self.instance is not None and self.instance < 0:
            raise MalformedKeyError(self.to_string(), "config key instance cannot be negative")

    @classmethod
    def parse(cls, raw: str) -> "ConfigKey":
        """Parse a raw key string.

        Segments are matched greedily from the left: a leading segment that
        starts with a letter or underscore is the environment, and a
        following all-digit segment is the instance. This makes "123.x"
        an instance-scoped key named "x".

        Raises:
            MalformedKeyError: If the string does not match the grammar
        """
        match = KEY_PATTERN.fullmatch(raw)
        if match is None:
            raise MalformedKeyError(raw)

        instance = match.group("instance")
        return cls(
            env=match.group("env"),
            instance=int(instance) if instance is not None else None,
            name=match.group("name"),
        )

    @classmethod
    def unscoped(cls, name: str) -> "ConfigKey":
        """Key that applies to every environment and instance."""
        return cls(env=None, instance=None, name=name)

    def precision_score(self) -> int:
        """Rank how specific this key is, from 0 (unscoped) to 3."""
        score = 0
        if self.instance is not None:
            score += INSTANCE_WEIGHT
        if self.env is not None:
            score += ENV_WEIGHT
        return score

    def to_string(self) -> str:
        """Canonical ``env.instance.name`` form, absent segments omitted."""
        parts = []
        if self.env is not None:
            parts.append(self.env)
        if self.instance is not None:
            parts.append(str(self.instance))
        parts.append(self.name)
        return ".".join(parts)

    def __str__(self) -> str:
        return self.to_string()
