"""
symsub Configuration
====================

Settings for a substitution run. Configuration can come from:
- Default values (defined here)
- Environment variables (SubstitutionConfig.from_env)
- Command-line options, which the CLI applies on top of the environment

Environment variables (all optional):
    SYMSUB_INITIAL_CAPACITY: Initial token buffer capacity (integer)
    SYMSUB_MAX_CAPACITY: Buffer growth ceiling (integer, 0 for unbounded)
    SYMSUB_ENCODING: Encoding used to read and write files
    SYMSUB_ON_OVERFLOW: "abort" or "split"

Copyright (c) 2026 symsub Contributors
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional
import os

from symsub.buffer import DEFAULT_CAPACITY, MIN_CAPACITY
from symsub.errors import ConfigError
from symsub.stream import DEFAULT_PUSHBACK_LIMIT


class OverflowPolicy(Enum):
    """What the driver does when a run cannot fit into the buffer."""
    ABORT = "abort"     # Stop and raise BufferGrowthError
    SPLIT = "split"     # Emit the part that fit and carry on with the rest


@dataclass
class SubstitutionConfig:
    """
    Configuration for a substitution run.

    Attributes:
        initial_capacity: Starting token buffer capacity (default: 80)
        max_capacity: Growth ceiling, None for unbounded (default: None)
        pushback_limit: Characters of pushback on the input stream (default: 1)
        encoding: File encoding; must map each byte to one character (default: latin-1)
        overflow_policy: Reaction to buffer growth failure (default: ABORT)
    """

    initial_capacity: int = DEFAULT_CAPACITY
    max_capacity: Optional[int] = None
    pushback_limit: int = DEFAULT_PUSHBACK_LIMIT
    encoding: str = "latin-1"
    overflow_policy: OverflowPolicy = OverflowPolicy.ABORT

    @classmethod
    def from_env(cls) -> "SubstitutionConfig":
        """
        Create a SubstitutionConfig from environment variables.

        Unparseable numbers and unknown policies are ignored.
        """
        config = cls()

        if capacity := os.environ.get("SYMSUB_INITIAL_CAPACITY"):
            try:
                config.initial_capacity = int(capacity)
            except ValueError:
                pass

        if ceiling := os.environ.get("SYMSUB_MAX_CAPACITY"):
            try:
                config.max_capacity = int(ceiling) or None
            except ValueError:
                pass

        if encoding := os.environ.get("SYMSUB_ENCODING"):
            config.encoding = encoding

        if policy := os.environ.get("SYMSUB_ON_OVERFLOW"):
            if policy.lower() in ("abort", "split"):
                config.overflow_policy = OverflowPolicy(policy.lower())

        return config

    def validate(self) -> "SubstitutionConfig":
        """
        Check that the settings are usable.

        Returns:
            self, so calls can be chained

        Raises:
            ConfigError: On the first invalid setting
        """
        if self.initial_capacity < MIN_CAPACITY:
            raise ConfigError(
                f"initial capacity must be at least {MIN_CAPACITY}, got {self.initial_capacity}"
            )
        if self.max_capacity is not None and self.max_capacity < self.initial_capacity:
            raise ConfigError(
                f"max capacity {self.max_capacity} is below initial capacity {self.initial_capacity}"
            )
        if self.pushback_limit < 1:
            raise ConfigError("pushback limit must be at least 1")
        if not is_single_byte_encoding(self.encoding):
            raise ConfigError(
                f"encoding '{self.encoding}' does not map every byte to one character",
                hint="use an 8-bit encoding such as latin-1",
            )
        return self


def is_single_byte_encoding(encoding: str) -> bool:
    """Return True if every byte value decodes to exactly one character and back."""
    try:
        chars = bytes(range(256)).decode(encoding)
        return len(chars) == 256 and all(len(ch.encode(encoding)) == 1 for ch in chars)
    except (LookupError, UnicodeError):
        return False
