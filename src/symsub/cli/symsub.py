"""
symsub - Token Search and Replace Command-Line Interface
========================================================

This module implements the command-line interface for symsub. It reads
an input file, splits it into tokens and replaces every token equal to
SEARCH with REPLACEMENT.

Usage Examples
--------------
Basic substitution (writes toolchain4.sh):
    $ symsub toolchain3.sh gcc clang

Explicit output file:
    $ symsub build.cfg DEBUG RELEASE -o build-release.cfg

Print to stdout instead of writing a file:
    $ symsub toolchain3.sh gcc clang --stdout

Bound the token buffer and split overlong runs:
    $ symsub data7.txt foo bar --max-capacity 4096 --on-overflow split

Copyright (c) 2026 symsub Contributors
"""

from pathlib import Path
from typing import Optional
import io
import logging
import sys

import click

from symsub import __version__
from symsub.cli.errors import ExitCode, handle_cli_exception
from symsub.config import OverflowPolicy, SubstitutionConfig
from symsub.stream import CharStream
from symsub.substitute import substitute_file, substitute_stream


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.argument("search")
@click.argument("replacement")
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output file (default: input name with its number incremented)",
)
@click.option(
    "--stdout",
    "to_stdout",
    is_flag=True,
    help="Write the result to stdout instead of a file",
)
@click.option(
    "--initial-capacity",
    type=click.IntRange(min=2),
    default=None,
    help="Initial token buffer capacity (default: 80)",
)
@click.option(
    "--max-capacity",
    type=click.IntRange(min=2),
    default=None,
    help=(
        "Largest capacity the token buffer may grow to; also caps the "
        "default initial capacity (default: unbounded)"
    ),
)
@click.option(
    "--on-overflow",
    type=click.Choice(["abort", "split"], case_sensitive=False),
    default=None,
    help="When a run outgrows the buffer: abort, or split it (default: abort)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="symsub")
def main(
    input_file: Path,
    search: str,
    replacement: str,
    output: Optional[Path],
    to_stdout: bool,
    initial_capacity: Optional[int],
    max_capacity: Optional[int],
    on_overflow: Optional[str],
    verbose: bool,
) -> None:
    """
    Replace whole tokens in a text file.

    INPUT_FILE is the file to read. Tokens are runs of letters and digits,
    or single other characters; only tokens exactly equal to SEARCH are
    replaced by REPLACEMENT.

    \b
    Examples:
        symsub toolchain3.sh gcc clang        # Writes toolchain4.sh
        symsub in.txt foo bar -o out.txt      # Specify output file
        symsub in.txt foo bar --stdout        # Print result
    """
    setup_logging(verbose)

    if output is not None and to_stdout:
        click.echo("Error: -o/--output and --stdout are mutually exclusive", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    try:
        # Command-line options override the environment
        config = SubstitutionConfig.from_env()
        if initial_capacity is not None:
            config.initial_capacity = initial_capacity
        if max_capacity is not None:
            config.max_capacity = max_capacity
            # A ceiling on its own also bounds the starting size
            if initial_capacity is None and config.initial_capacity > max_capacity:
                config.initial_capacity = max_capacity
        if on_overflow is not None:
            config.overflow_policy = OverflowPolicy(on_overflow.lower())
        config.validate()

        if verbose:
            click.echo(f"Input file: {input_file}", err=True)
            click.echo(f"Replacing {search!r} with {replacement!r}", err=True)
            ceiling = config.max_capacity or "unbounded"
            click.echo(
                f"Buffer: {config.initial_capacity} characters (max {ceiling}), "
                f"overflow: {config.overflow_policy.value}",
                err=True,
            )

        if to_stdout:
            sink = io.StringIO(newline="")
            with open(input_file, "r", encoding=config.encoding, newline="") as infile:
                stream = CharStream(infile, pushback_limit=config.pushback_limit)
                stats = substitute_stream(
                    stream, sink, search, replacement, config, filename=str(input_file)
                )
            # Same bytes as the input encoding, not stdout's
            stdout = click.get_binary_stream("stdout")
            stdout.write(sink.getvalue().encode(config.encoding))
            stdout.flush()
        else:
            result = substitute_file(input_file, search, replacement, output, config)
            stats = result.stats
            if verbose:
                click.echo(f"Wrote {result.output_path}", err=True)

        if verbose:
            click.echo(
                f"Tokens: {stats.tokens}, replaced: {stats.replacements}, "
                f"split runs: {stats.split_runs}, buffer growths: {stats.growths}",
                err=True,
            )

    except Exception as e:
        handle_cli_exception(e, verbose=verbose)


if __name__ == "__main__":
    main()
