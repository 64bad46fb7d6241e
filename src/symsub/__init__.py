"""
symsub - Streaming Token Substitution
=====================================

This package splits a character stream into tokens and rewrites it with
selected tokens replaced. A token is either a maximal run of ASCII letters
and digits, or a single other character; ">>text3.txt" becomes ">", ">",
"text3", ".", "txt".

Main Components
---------------
- **buffer**: GrowableBuffer, the doubling token buffer
- **stream**: CharStream, character input with one-character pushback
- **tokenizer**: next_token() and the Tokenizer iterator
- **substitute**: the search/replace driver and output file naming
- **config**: SubstitutionConfig, defaults and environment overrides

Quick Start
-----------
Tokenize a string:
    >>> from symsub import tokenize_string
    >>> tokenize_string(">>text3.txt")
    ['>', '>', 'text3', '.', 'txt']

Substitute tokens in a file (writes toolchain4.sh):
    >>> from symsub import substitute_file
    >>> result = substitute_file("toolchain3.sh", "gcc", "clang")

Or use the command-line tool:
    $ symsub toolchain3.sh gcc clang
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from symsub.buffer import GrowableBuffer
from symsub.config import OverflowPolicy, SubstitutionConfig
from symsub.errors import (
    SymsubError,
    TokenizerError,
    BufferGrowthError,
    PushbackOverflowError,
    SubstitutionError,
    OrdinalError,
    ConfigError,
)
from symsub.stream import EOF, CharStream
from symsub.substitute import (
    SubstitutionResult,
    SubstitutionStats,
    derive_output_path,
    parse_ordinal,
    substitute_file,
    substitute_stream,
)
from symsub.tokenizer import (
    ScanStatus,
    Token,
    TokenKind,
    Tokenizer,
    is_alnum,
    next_token,
    tokenize_string,
)

__all__ = [
    "__version__",
    # Core
    "GrowableBuffer",
    "CharStream",
    "EOF",
    "Token",
    "TokenKind",
    "ScanStatus",
    "Tokenizer",
    "is_alnum",
    "next_token",
    "tokenize_string",
    # Driver
    "SubstitutionConfig",
    "OverflowPolicy",
    "SubstitutionResult",
    "SubstitutionStats",
    "derive_output_path",
    "parse_ordinal",
    "substitute_file",
    "substitute_stream",
    # Exception hierarchy
    "SymsubError",
    "TokenizerError",
    "BufferGrowthError",
    "PushbackOverflowError",
    "SubstitutionError",
    "OrdinalError",
    "ConfigError",
]
