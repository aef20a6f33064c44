"""
Command-line interface for paired FASTQ filtering.

Example
-------
    fastq_filterer --i1 R1.fastq.gz --i2 R2.fastq.gz --threshold 36 \\
        --trim_r1 50 --remove_tiles 1101,1102 --stats_file run.stats
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .config import FilterConfig
from .constants import FASTQ_SUFFIXES, FILTERED_SUFFIX
from .engine import filter_fastqs
from .errors import ConfigurationError, FastqFilterError
from .report import RunPaths, write_stats

logger = logging.getLogger(__name__)


def build_output_path(input_path: str) -> str:
    """
    Derive an output path from an input path.

    Examples
    --------
    >>> build_output_path('reads/sample_R1.fastq.gz')
    'reads/sample_R1_filtered.fastq'
    >>> build_output_path('sample_R2.fq')
    'sample_R2_filtered.fastq'
    """
    base = str(input_path)
    for suffix in FASTQ_SUFFIXES:
        if base.endswith(suffix):
            base = base[:-len(suffix)]
            break
    return base + FILTERED_SUFFIX


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='fastq_filterer',
        description=(
            'Filter a pair of FASTQ files, removing read pairs where either '
            'mate is not longer than a length threshold'
        ),
    )

    parser.add_argument(
        '--i1',
        default=None,
        help='Input R1 FASTQ (plain or gzipped)',
    )
    parser.add_argument(
        '--i2',
        default=None,
        help='Input R2 FASTQ (plain or gzipped)',
    )
    parser.add_argument(
        '--o1',
        default=None,
        help='Output R1 FASTQ (default: derived from --i1)',
    )
    parser.add_argument(
        '--o2',
        default=None,
        help='Output R2 FASTQ (default: derived from --i2)',
    )
    parser.add_argument(
        '--threshold',
        type=int,
        default=None,
        help='Read pairs where either mate is this long or shorter are removed',
    )
    parser.add_argument(
        '--stats_file',
        default=None,
        help='Write a summary of the run to this file',
    )
    parser.add_argument(
        '--stats_format',
        choices=['text', 'csv'],
        default='text',
        help='Format of the stats file',
    )
    parser.add_argument(
        '--remove_tiles',
        default=None,
        help='Comma-separated tile IDs; read pairs from these tiles are removed',
    )
    parser.add_argument(
        '--trim_r1',
        type=int,
        default=None,
        help='Truncate kept R1 reads to this length',
    )
    parser.add_argument(
        '--trim_r2',
        type=int,
        default=None,
        help='Truncate kept R2 reads to this length',
    )
    parser.add_argument(
        '--unsafe',
        action='store_true',
        help='Read lines into a fixed-size buffer. Faster, but lines longer than 4095 characters are truncated',
    )
    parser.add_argument(
        '-q', '--quiet',
        action='store_true',
        help='Only log warnings and errors',
    )
    parser.add_argument(
        '-d', '--debug',
        action='store_true',
        help='Enable debug logging',
    )
    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}',
    )
    return parser


def _log_level(args: argparse.Namespace) -> int:
    if args.debug:
        return logging.DEBUG
    if args.quiet:
        return logging.WARNING
    return logging.INFO


def run(args: argparse.Namespace) -> int:
    """
    Run the filter for parsed arguments and return the exit status.

    Raises
    ------
    ConfigurationError
        If required arguments are missing or invalid.
    StreamOpenError
        If an input or output cannot be opened.
    """
    missing = [name for name in ('i1', 'i2', 'threshold') if getattr(args, name) is None]
    if missing:
        raise ConfigurationError(f"Missing required arguments: {', '.join(missing)}")

    config = FilterConfig.from_options(
        threshold=args.threshold,
        remove_tiles=args.remove_tiles,
        trim_r1=args.trim_r1,
        trim_r2=args.trim_r2,
        unsafe=args.unsafe,
    )

    r1_out = args.o1
    if r1_out is None:
        logger.info("No o1 argument given - deriving from i1")
        r1_out = build_output_path(args.i1)
    r2_out = args.o2
    if r2_out is None:
        logger.info("No o2 argument given - deriving from i2")
        r2_out = build_output_path(args.i2)

    paths = RunPaths(
        r1_in=Path(args.i1),
        r1_out=Path(r1_out),
        r2_in=Path(args.i2),
        r2_out=Path(r2_out),
    )

    logger.info(f"R1: {paths.r1_in} -> {paths.r1_out}")
    logger.info(f"R2: {paths.r2_in} -> {paths.r2_out}")
    for line in config.describe():
        logger.info(line)

    result = filter_fastqs(config, paths.r1_in, paths.r2_in, paths.r1_out, paths.r2_out)

    if args.stats_file is not None:
        write_stats(args.stats_file, paths, result.stats, config, format=args.stats_format)

    return result.exit_code


def main(argv: Optional[List[str]] = None) -> int:
    """Command-line entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # Configure logging
    logging.basicConfig(
        level=_log_level(args),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )

    try:
        return run(args)
    except FastqFilterError as e:
        logger.error(str(e))
        return 1


if __name__ == '__main__':
    sys.exit(main())
