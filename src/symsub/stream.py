"""
Character Input Stream
======================

CharStream delivers input one character at a time and lets the tokenizer
push a character back so it is re-delivered by the next read. End of
input is signalled by the empty string, EOF.

The stream wraps any text file object. Files should be opened with an
8-bit encoding such as latin-1 so that every byte becomes exactly one
character, and with newline="" so line endings pass through untouched.

Example Usage
-------------
>>> stream = CharStream.from_string("ab")
>>> stream.read_char()
'a'
>>> stream.push_back("a")
>>> stream.read_char()
'a'
>>> stream.read_char(), stream.read_char()
('b', '')
"""

from typing import TextIO
import io

from symsub.errors import PushbackOverflowError

# End-of-input marker returned by read_char()
EOF = ""

# Characters of pushback the tokenizer needs
DEFAULT_PUSHBACK_LIMIT = 1


class CharStream:
    """
    Sequential character source with bounded pushback.

    Attributes:
        source: The wrapped text file object
        pushback_limit: How many characters may be pushed back at once
        position: Offset of the next character to be delivered
    """

    def __init__(self, source: TextIO, pushback_limit: int = DEFAULT_PUSHBACK_LIMIT):
        if pushback_limit < 1:
            raise ValueError("pushback_limit must be at least 1")
        self.source = source
        self.pushback_limit = pushback_limit
        self.position = 0
        self._pushed: list[str] = []

    @classmethod
    def from_string(cls, text: str, pushback_limit: int = DEFAULT_PUSHBACK_LIMIT) -> "CharStream":
        """Create a stream over an in-memory string."""
        return cls(io.StringIO(text, newline=""), pushback_limit=pushback_limit)

    def read_char(self) -> str:
        """Return the next character, or EOF at end of input."""
        if self._pushed:
            char = self._pushed.pop()
        else:
            char = self.source.read(1)
            if char == EOF:
                return EOF
        self.position += 1
        return char

    def push_back(self, char: str) -> None:
        """
        Return a character to the stream.

        Raises:
            PushbackOverflowError: If the pushback limit is already reached
        """
        if len(char) != 1:
            raise ValueError(f"can only push back a single character, got {char!r}")
        if len(self._pushed) >= self.pushback_limit:
            raise PushbackOverflowError(self.pushback_limit, offset=self.position)
        self._pushed.append(char)
        self.position -= 1
