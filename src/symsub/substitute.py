"""
Token Substitution Driver
=========================

Runs the tokenizer over an input and writes every token to an output,
replacing tokens equal to a search string with a replacement string.
Matching is on whole tokens only: with search "cat", the input
"cat catalog" becomes "dog catalog", not "dog dogalog".

File Naming
-----------
Input files named <prefix><integer>.<ext> get a default output name with
the integer incremented by one. Zero padding is kept:

| Input            | Output           |
|------------------|------------------|
| toolchain3.sh    | toolchain4.sh    |
| run009.log       | run010.log       |
| build99.cfg      | build100.cfg     |

Overflow Handling
-----------------
When an alphanumeric run cannot fit into the token buffer, the tokenizer
reports GROWTH_FAILURE. The tokenizer itself retries growth on every
call; whether a failure is final is decided here, by OverflowPolicy:

- ABORT: raise BufferGrowthError. substitute_file() then leaves no
  output file behind.
- SPLIT: write the part of the run that fit, uncompared, and continue
  from the pushed-back character. Output stays byte-identical to input
  apart from replacements.

Copyright (c) 2026 symsub Contributors
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, TextIO, Union
import logging
import os
import re

from symsub.buffer import GrowableBuffer
from symsub.config import OverflowPolicy, SubstitutionConfig
from symsub.errors import OrdinalError, SubstitutionError
from symsub.stream import CharStream
from symsub.tokenizer import ScanStatus, Tokenizer, is_alnum

logger = logging.getLogger(__name__)

# <prefix><integer>.<ext>; the ordinal is the digit run right before the last dot
ORDINAL_PATTERN = re.compile(r"^(?P<prefix>.*?)(?P<ordinal>\d+)\.(?P<ext>[^.]+)$")


# =============================================================================
# Result Types
# =============================================================================

@dataclass
class SubstitutionStats:
    """
    Counters for one substitution pass.

    Attributes:
        tokens: Tokens written (split pieces count once each)
        replacements: Tokens replaced
        split_runs: Runs that were split because the buffer could not grow
        growths: Successful buffer growths
        final_capacity: Buffer capacity at the end of the pass
    """
    tokens: int = 0
    replacements: int = 0
    split_runs: int = 0
    growths: int = 0
    final_capacity: int = 0


@dataclass
class SubstitutionResult:
    """Outcome of substitute_file()."""
    input_path: Path
    output_path: Path
    stats: SubstitutionStats


# =============================================================================
# File Naming
# =============================================================================

def parse_ordinal(path: Union[str, Path]) -> int:
    """
    Parse the ordinal out of a <prefix><integer>.<ext> file name.

    Raises:
        OrdinalError: If the name does not follow the pattern
    """
    name = Path(path).name
    match = ORDINAL_PATTERN.match(name)
    if not match:
        raise OrdinalError(str(path))
    return int(match.group("ordinal"))


def derive_output_path(path: Union[str, Path]) -> Path:
    """
    Return the input path with its ordinal incremented by one.

    The directory is kept and so is the width of a zero-padded ordinal.

    Raises:
        OrdinalError: If the name does not follow the pattern
    """
    path = Path(path)
    match = ORDINAL_PATTERN.match(path.name)
    if not match:
        raise OrdinalError(str(path))

    digits = match.group("ordinal")
    ordinal = str(int(digits) + 1).zfill(len(digits))
    return path.with_name(f"{match.group('prefix')}{ordinal}.{match.group('ext')}")


# =============================================================================
# Substitution
# =============================================================================

def substitute_stream(
    stream: CharStream,
    sink: TextIO,
    search: str,
    replacement: str,
    config: Optional[SubstitutionConfig] = None,
    filename: Optional[str] = None,
) -> SubstitutionStats:
    """
    Copy tokens from stream to sink, replacing those equal to search.

    Args:
        stream: Input characters
        sink: Writable text file object
        search: Token to look for (compared for exact equality)
        replacement: Text written in place of each match
        config: Buffer and overflow settings (default: SubstitutionConfig())
        filename: Input name for error messages

    Returns:
        SubstitutionStats for the pass

    Raises:
        BufferGrowthError: On growth failure with OverflowPolicy.ABORT
    """
    config = (config or SubstitutionConfig()).validate()
    if not search:
        raise SubstitutionError("search token must not be empty")
    try:
        replacement.encode(config.encoding)
    except UnicodeEncodeError:
        raise SubstitutionError(
            f"replacement {replacement!r} cannot be written as {config.encoding}"
        )
    if len(search) > 1 and not all(is_alnum(c) for c in search):
        logger.warning(
            f"Search token {search!r} mixes alphanumeric and other characters; "
            "it can never match a single token"
        )

    buffer = GrowableBuffer(config.initial_capacity, config.max_capacity)
    tokenizer = Tokenizer(stream, buffer, filename=filename)
    stats = SubstitutionStats()

    while True:
        result = tokenizer.next_token()

        if result is ScanStatus.END_OF_INPUT:
            break

        if result is ScanStatus.GROWTH_FAILURE:
            if config.overflow_policy is OverflowPolicy.ABORT:
                raise tokenizer.growth_error()
            logger.warning(
                f"Run at offset {stream.position - len(buffer)} exceeds "
                f"{buffer.capacity} characters; splitting"
            )
            sink.write(buffer.text)
            stats.tokens += 1
            stats.split_runs += 1
            continue

        stats.tokens += 1
        if result.text == search:
            sink.write(replacement)
            stats.replacements += 1
        else:
            sink.write(result.text)

    stats.growths = buffer.growths
    stats.final_capacity = buffer.capacity
    return stats


def substitute_file(
    input_path: Union[str, Path],
    search: str,
    replacement: str,
    output_path: Union[str, Path, None] = None,
    config: Optional[SubstitutionConfig] = None,
) -> SubstitutionResult:
    """
    Substitute tokens in a file, writing the result to another file.

    Args:
        input_path: File to read
        search: Token to look for
        replacement: Text written in place of each match
        output_path: File to write (default: derive_output_path(input_path))
        config: Settings (default: SubstitutionConfig())

    Raises:
        OrdinalError: If no output path is given and none can be derived
        SubstitutionError: If output and input are the same file
        BufferGrowthError: On growth failure with OverflowPolicy.ABORT
    """
    config = (config or SubstitutionConfig()).validate()
    input_path = Path(input_path)
    output_path = Path(output_path) if output_path is not None else derive_output_path(input_path)

    if output_path.exists() and output_path.resolve() == input_path.resolve():
        raise SubstitutionError(
            "output file would overwrite the input",
            filename=str(input_path),
        )

    logger.debug(f"Substituting {search!r} -> {replacement!r}: {input_path} -> {output_path}")

    # Output goes to a hidden file beside the destination and is renamed into place
    partial_path = output_path.with_name(f".{output_path.name}.partial")
    with open(input_path, "r", encoding=config.encoding, newline="") as infile:
        try:
            with open(partial_path, "w", encoding=config.encoding, newline="") as outfile:
                stream = CharStream(infile, pushback_limit=config.pushback_limit)
                stats = substitute_stream(
                    stream, outfile, search, replacement, config, filename=str(input_path)
                )
            os.replace(partial_path, output_path)
        except BaseException:
            logger.debug(f"Substitution failed; removing {partial_path}")
            partial_path.unlink(missing_ok=True)
            raise

    logger.debug(
        f"Wrote {output_path}: {stats.tokens} tokens, {stats.replacements} replaced"
    )
    return SubstitutionResult(input_path, output_path, stats)
