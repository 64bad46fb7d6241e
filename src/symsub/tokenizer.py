"""
Streaming Tokenizer
===================

This module splits a character stream into tokens. A token is either a
maximal run of alphanumeric characters (a WORD) or a single
non-alphanumeric character (a SYMBOL).

For example, the input ">>text3.txt" is tokenized as ">", ">", "text3",
".", "txt".

Non-alphanumeric characters play two roles: they are tokens of their own,
and they end any alphanumeric run in progress. In the second role the
character is pushed back onto the stream so that it starts the next token
instead of being swallowed.

Classification is byte-oriented and not Unicode-aware: only the ASCII
letters and digits count as alphanumeric.

Scan Results
------------
next_token() returns one of:
- a Token
- ScanStatus.END_OF_INPUT when the stream is exhausted
- ScanStatus.GROWTH_FAILURE when a run did not fit and the buffer could
  not grow; the buffer holds the part that fit and the character that
  did not fit has been pushed back

Example Usage
-------------
>>> from symsub.stream import CharStream
>>> from symsub.buffer import GrowableBuffer
>>> tokenizer = Tokenizer(CharStream.from_string(">>text3.txt"), GrowableBuffer())
>>> [token.text for token in tokenizer.tokenize()]
['>', '>', 'text3', '.', 'txt']

Copyright (c) 2026 symsub Contributors
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Optional, Union
import logging
import string

from symsub.buffer import GrowableBuffer
from symsub.errors import BufferGrowthError
from symsub.stream import EOF, CharStream

logger = logging.getLogger(__name__)

# C-locale isalpha() / isdigit()
ALNUM_CHARS = frozenset(string.ascii_letters + string.digits)


def is_alnum(char: str) -> bool:
    """Return True if char is an ASCII letter or digit."""
    return char in ALNUM_CHARS


# =============================================================================
# Token Types
# =============================================================================

class TokenKind(Enum):
    """Token categories."""
    WORD = auto()       # Maximal alphanumeric run
    SYMBOL = auto()     # Single non-alphanumeric character


class ScanStatus(Enum):
    """Non-token outcomes of next_token()."""
    END_OF_INPUT = auto()
    GROWTH_FAILURE = auto()


@dataclass(frozen=True)
class Token:
    """
    A single token.

    The tokenizer reuses its buffer, so the text here is a copy taken
    when the token was produced.

    Attributes:
        text: The token characters (never empty)
        kind: WORD or SYMBOL
        offset: Zero-based position of the first character in the stream
    """
    text: str
    kind: TokenKind
    offset: int

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.text!r}, @{self.offset})"

    def __str__(self) -> str:
        return self.text


ScanResult = Union[Token, ScanStatus]


# =============================================================================
# Core Scanner
# =============================================================================

def next_token(stream: CharStream, buffer: GrowableBuffer) -> ScanResult:
    """
    Read the next token from the stream into the buffer.

    Args:
        stream: Input source, positioned at the start of a token
        buffer: Accumulation target; grown on demand

    Returns:
        A Token, ScanStatus.END_OF_INPUT or ScanStatus.GROWTH_FAILURE
    """
    chars_read = 0
    start = stream.position

    while (char := stream.read_char()) != EOF:
        if not is_alnum(char):
            if chars_read > 0:
                # Delimiter ends the run; it starts the next token
                stream.push_back(char)
                buffer.terminate(chars_read)
                return Token(buffer.text, TokenKind.WORD, start)

            buffer.put(0, char)
            buffer.terminate(1)
            return Token(char, TokenKind.SYMBOL, start)

        if buffer.fits(chars_read) or buffer.grow():
            buffer.put(chars_read, char)
            chars_read += 1
        else:
            stream.push_back(char)
            buffer.terminate(chars_read)
            return ScanStatus.GROWTH_FAILURE

    if chars_read > 0:
        buffer.terminate(chars_read)
        return Token(buffer.text, TokenKind.WORD, start)

    buffer.reset()
    return ScanStatus.END_OF_INPUT


# =============================================================================
# Tokenizer
# =============================================================================

class Tokenizer:
    """
    Drives next_token() over one stream and one buffer.

    Usage:
        tokenizer = Tokenizer(CharStream(fp), GrowableBuffer())
        for token in tokenizer.tokenize():
            ...

    Attributes:
        stream: The input stream
        buffer: The token buffer
        filename: Name of the input (for error messages)
    """

    def __init__(
        self,
        stream: CharStream,
        buffer: Optional[GrowableBuffer] = None,
        filename: Optional[str] = None,
    ):
        self.stream = stream
        self.buffer = buffer if buffer is not None else GrowableBuffer()
        self.filename = filename

    def next_token(self) -> ScanResult:
        """Scan one token; see the module-level next_token()."""
        return next_token(self.stream, self.buffer)

    def tokenize(self) -> Iterator[Token]:
        """
        Generate tokens until end of input.

        Raises:
            BufferGrowthError: If a run does not fit and the buffer cannot grow
        """
        while True:
            result = self.next_token()
            if result is ScanStatus.END_OF_INPUT:
                return
            if result is ScanStatus.GROWTH_FAILURE:
                logger.debug(f"Growth failure after {len(self.buffer)} characters")
                raise self.growth_error()
            yield result

    def growth_error(self) -> BufferGrowthError:
        """Build the error for a growth failure that just happened."""
        partial = self.buffer.text
        return BufferGrowthError(
            partial,
            self.buffer.capacity,
            offset=self.stream.position - len(partial),
            filename=self.filename,
        )


def tokenize_string(text: str, capacity: Optional[int] = None) -> list[str]:
    """
    Convenience helper: return the token texts of an in-memory string.

    Raises:
        BufferGrowthError: Only if memory runs out
    """
    buffer = GrowableBuffer() if capacity is None else GrowableBuffer(capacity)
    tokenizer = Tokenizer(CharStream.from_string(text), buffer)
    return [token.text for token in tokenizer.tokenize()]
