"""
symsub Error Hierarchy
======================

This module defines the exception hierarchy for symsub. All exceptions
inherit from SymsubError, allowing callers to catch every symsub-related
error with a single except clause.

Exception Hierarchy
-------------------
SymsubError (base)
├── TokenizerError (tokenizer-related)
│   ├── BufferGrowthError - a run outgrew the token buffer
│   └── PushbackOverflowError - more characters pushed back than allowed
├── SubstitutionError (driver-related)
│   └── OrdinalError - input file name carries no ordinal
└── ConfigError - invalid configuration value

Note that the tokenizer core never raises BufferGrowthError itself: it
reports growth failure as a status value. The exception is raised by the
layers above it (the Tokenizer iterator and the substitution driver) once
they decide the failure is final.

Error messages follow this format:
    [filename:]offset N: error: description
    hint: suggestion for fixing (when available)
"""

from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class SymsubError(Exception):
    """
    Base exception for all symsub errors.

        try:
            substitute_file("toolchain3.sh", "gcc", "clang")
        except SymsubError as e:
            print(f"Error: {e}")
    """

    def __init__(
        self,
        message: str,
        offset: Optional[int] = None,
        filename: Optional[str] = None,
        hint: Optional[str] = None,
    ):
        self.message = message
        self.offset = offset
        self.filename = filename
        self.hint = hint
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location and hint.

        Example output:
            toolchain3.sh: offset 1042: error: token buffer cannot grow past 4096 characters
            hint: raise --max-capacity or use --on-overflow split
        """
        parts = []

        location = []
        if self.filename:
            location.append(self.filename)
        if self.offset is not None:
            location.append(f"offset {self.offset}")

        if location:
            parts.append(f"{': '.join(location)}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


# =============================================================================
# Tokenizer Exceptions
# =============================================================================

class TokenizerError(SymsubError):
    """Base exception for errors raised around the tokenizer."""
    pass


class BufferGrowthError(TokenizerError):
    """
    An alphanumeric run could not be accumulated.

    Raised when the token buffer is full and doubling it failed, either
    because the configured ceiling was reached or because memory ran out.
    The character that did not fit has already been pushed back onto the
    input stream, so the stream position is consistent.

    Attributes:
        partial: The part of the run that fit into the buffer
        capacity: The buffer capacity at the time of failure
    """

    def __init__(
        self,
        partial: str,
        capacity: int,
        offset: Optional[int] = None,
        filename: Optional[str] = None,
        hint: Optional[str] = None,
    ):
        self.partial = partial
        self.capacity = capacity
        if hint is None:
            hint = "raise the maximum buffer capacity or split overlong runs"
        super().__init__(
            f"token buffer cannot grow past {capacity} characters "
            f"(run starts with {partial[:16]!r})",
            offset=offset,
            filename=filename,
            hint=hint,
        )


class PushbackOverflowError(TokenizerError):
    """
    More characters were pushed back than the stream can hold.

    The tokenizer needs exactly one character of pushback. Hitting this
    error means a caller pushed back without reading in between.
    """

    def __init__(self, limit: int, offset: Optional[int] = None):
        self.limit = limit
        super().__init__(
            f"pushback limit of {limit} character(s) exceeded",
            offset=offset,
        )


# =============================================================================
# Substitution Exceptions
# =============================================================================

class SubstitutionError(SymsubError):
    """Base exception for errors in the substitution driver."""
    pass


class OrdinalError(SubstitutionError):
    """
    The input file name does not match <prefix><integer>.<ext>.

    Raised when an output name has to be derived from the input name but
    no ordinal can be parsed out of it.
    """

    def __init__(self, filename: str):
        super().__init__(
            "could not parse out ordinal",
            filename=filename,
            hint="name the input like 'toolchain3.sh' or pass --output",
        )


# =============================================================================
# Configuration Exceptions
# =============================================================================

class ConfigError(SymsubError):
    """
    Invalid configuration value.

    Raised by SubstitutionConfig.validate() when, for example, the initial
    capacity is below 2 or the ceiling is smaller than the initial capacity.
    """
    pass
