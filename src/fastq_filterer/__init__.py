"""
fastq_filterer - length and tile filtering for paired-end FASTQ files.

Reads the mate 1 and mate 2 files of a paired-end run in lock-step and
removes read pairs where either mate is too short or, optionally, where the
read came from an excluded sequencer tile. Kept reads can be truncated to a
fixed length per mate.

Main Classes
------------
FilterEngine
    Drives the paired read/filter/write loop.
FilterConfig
    Threshold, tile exclusion, trim lengths and buffering mode.
RecordReader
    Reads four-line FASTQ records from one stream.
StatsAccumulator
    Counts read pairs checked, removed and remaining.

Policies
--------
LengthPolicy, LengthAndTilePolicy
    Inclusion policies (keep or discard a read pair).
IdentityTransform, TruncateTransform
    Transform policies applied to kept records.

Examples
--------
>>> from fastq_filterer import FilterConfig, filter_fastqs
>>> config = FilterConfig.from_options(threshold=36, trim_r1=50)
>>> result = filter_fastqs(
...     config,
...     'sample_R1.fastq.gz', 'sample_R2.fastq.gz',
...     'sample_R1_filtered.fastq', 'sample_R2_filtered.fastq',
... )
>>> result.success
True
"""

__version__ = "0.1.0"

from .config import FilterConfig, parse_tile_list
from .engine import EngineState, FilterEngine, FilterResult, RunStatus, filter_fastqs
from .errors import ConfigurationError, DesyncError, FastqFilterError, StreamOpenError
from .fastq_record import FastqRecord, ReadPair, tile_id
from .policies import (
    IdentityTransform,
    InclusionPolicy,
    LengthAndTilePolicy,
    LengthPolicy,
    TransformPolicy,
    TruncateTransform,
    build_inclusion_policy,
    build_transform_policy,
    identity,
    length_and_tile,
    length_only,
    truncate,
)
from .record_reader import RecordReader, open_fastq, open_output
from .report import RunPaths, write_stats
from .stats import RunStats, StatsAccumulator

__all__ = [
    # Main classes
    "FilterEngine",
    "FilterConfig",
    "FilterResult",
    "RecordReader",
    "StatsAccumulator",
    # Data types
    "FastqRecord",
    "ReadPair",
    "RunStats",
    "RunPaths",
    "EngineState",
    "RunStatus",
    # Policies
    "InclusionPolicy",
    "LengthPolicy",
    "LengthAndTilePolicy",
    "TransformPolicy",
    "IdentityTransform",
    "TruncateTransform",
    "build_inclusion_policy",
    "build_transform_policy",
    "length_only",
    "length_and_tile",
    "identity",
    "truncate",
    # Convenience functions
    "filter_fastqs",
    "open_fastq",
    "open_output",
    "parse_tile_list",
    "tile_id",
    "write_stats",
    # Errors
    "FastqFilterError",
    "ConfigurationError",
    "StreamOpenError",
    "DesyncError",
]
