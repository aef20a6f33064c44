"""
Paired FASTQ filtering engine.

Reads mate 1 and mate 2 in lock-step one record at a time, keeps or drops
each pair according to an inclusion policy, transforms kept records and
writes them out. The run ends when both inputs are exhausted together, or
with a desync status when one ends first.
"""

import logging
from contextlib import ExitStack
from dataclasses import dataclass
from enum import Enum
from os import PathLike
from typing import IO, Optional, Union

from .config import FilterConfig
from .constants import LINES_PER_RECORD, PROGRESS_INTERVAL
from .errors import DesyncError
from .fastq_record import ReadPair
from .policies import (
    InclusionPolicy,
    IdentityTransform,
    TransformPolicy,
    build_inclusion_policy,
    build_transform_policy,
)
from .record_reader import RecordReader, open_fastq, open_output
from .stats import RunStats, StatsAccumulator, stats_to_series

logger = logging.getLogger(__name__)


class EngineState(Enum):
    RUNNING = 'running'
    DONE_SUCCESS = 'done_success'
    DONE_DESYNC = 'done_desync'


class RunStatus(Enum):
    SUCCESS = 'success'
    DESYNC = 'desync'


@dataclass(frozen=True)
class FilterResult:
    """
    Outcome of a filtering run.

    Attributes
    ----------
    status : RunStatus
        SUCCESS if both inputs ended together, DESYNC otherwise.
    stats : RunStats
        Counters at the end of the run.
    desync_line : int, optional
        Approximate line offset of the mismatch, for DESYNC results.
    """

    status: RunStatus
    stats: RunStats
    desync_line: Optional[int] = None

    @property
    def success(self) -> bool:
        return self.status is RunStatus.SUCCESS

    @property
    def exit_code(self) -> int:
        """Process exit status: 0 on success, 1 on desync."""
        return 0 if self.success else 1

    def raise_for_status(self) -> None:
        """Raise `DesyncError` if the inputs had differing numbers of reads."""
        if not self.success:
            raise DesyncError(self.desync_line, self.stats)

    def print_summary(self) -> None:
        """Print a summary of the run."""
        print(f"Status: {self.status.value}")
        print(stats_to_series(self.stats).to_string())
        if self.stats.checked:
            print(f"Removed fraction: {self.stats.removed_fraction:.2%}")
        if self.desync_line is not None:
            print(f"Inputs diverged from line {self.desync_line}")


class FilterEngine:
    """
    Filter a pair of FASTQ streams.

    The engine owns its four streams from construction on and closes all of
    them when the run ends, whichever way it ends.

    Parameters
    ----------
    mate1_reader, mate2_reader : RecordReader
        Readers over the mate 1 and mate 2 inputs.
    mate1_out, mate2_out : text stream
        Writable streams for kept mate 1 and mate 2 records.
    inclusion_policy : InclusionPolicy
        Decides which pairs are kept.
    mate1_transform, mate2_transform : TransformPolicy, optional
        Applied to each kept record of the corresponding mate. Defaults to
        `IdentityTransform`.

    Attributes
    ----------
    state : EngineState
        RUNNING until `run` returns.
    stats : StatsAccumulator
        Counters updated during the run.

    Examples
    --------
    >>> engine = FilterEngine.from_config(config, r1_in, r2_in, r1_out, r2_out)
    >>> result = engine.run()
    >>> result.stats.checked == result.stats.removed + result.stats.remaining
    True
    """

    def __init__(
        self,
        mate1_reader: RecordReader,
        mate2_reader: RecordReader,
        mate1_out: IO[str],
        mate2_out: IO[str],
        inclusion_policy: InclusionPolicy,
        mate1_transform: Optional[TransformPolicy] = None,
        mate2_transform: Optional[TransformPolicy] = None,
    ):
        self._mate1_reader = mate1_reader
        self._mate2_reader = mate2_reader
        self._mate1_out = mate1_out
        self._mate2_out = mate2_out
        self.inclusion_policy = inclusion_policy
        self.mate1_transform = mate1_transform or IdentityTransform()
        self.mate2_transform = mate2_transform or IdentityTransform()

        self.state = EngineState.RUNNING
        self.stats = StatsAccumulator()

    @classmethod
    def from_config(
        cls,
        config: FilterConfig,
        mate1_in: IO[str],
        mate2_in: IO[str],
        mate1_out: IO[str],
        mate2_out: IO[str],
    ) -> "FilterEngine":
        """Build readers and policies for `config` around already open streams."""
        return cls(
            mate1_reader=RecordReader(mate1_in, unsafe=config.unsafe_fixed_buffer),
            mate2_reader=RecordReader(mate2_in, unsafe=config.unsafe_fixed_buffer),
            mate1_out=mate1_out,
            mate2_out=mate2_out,
            inclusion_policy=build_inclusion_policy(config),
            mate1_transform=build_transform_policy(config.trim_len_mate1),
            mate2_transform=build_transform_policy(config.trim_len_mate2),
        )

    def run(self) -> FilterResult:
        """
        Filter until both inputs are exhausted or one ends early.

        Returns
        -------
        FilterResult
            SUCCESS with the final counters, or DESYNC with the counters at
            the point of divergence and the approximate line offset.

        Raises
        ------
        RuntimeError
            If the engine has already run.
        """
        if self.state is not EngineState.RUNNING:
            raise RuntimeError(f"Engine has already finished ({self.state.value})")

        try:
            result = self._filter()
        finally:
            self._close()

        if result.success:
            self.state = EngineState.DONE_SUCCESS
        else:
            self.state = EngineState.DONE_DESYNC
        return result

    def _filter(self) -> FilterResult:
        while True:
            r1 = self._mate1_reader.read_record()
            r2 = self._mate2_reader.read_record()

            if r1.is_eof or r2.is_eof:
                stats = self.stats.snapshot()
                if r1.is_eof and r2.is_eof:
                    return FilterResult(RunStatus.SUCCESS, stats)

                line = stats.checked * LINES_PER_RECORD
                logger.error(f"Input fastqs have differing numbers of reads, from line {line}")
                return FilterResult(RunStatus.DESYNC, stats, desync_line=line)

            pair = ReadPair(r1, r2)
            if self.inclusion_policy.keep(pair):
                self.stats.record_kept()
                self.mate1_transform.apply(r1).write(self._mate1_out)
                self.mate2_transform.apply(r2).write(self._mate2_out)
            else:
                self.stats.record_removed()

            if self.stats.checked % PROGRESS_INTERVAL == 0:
                logger.debug(f"{self.stats.checked:,} read pairs checked...")

    def _close(self) -> None:
        # Every stream is closed even if an earlier close raises
        with ExitStack() as stack:
            for stream in (self._mate1_reader, self._mate2_reader, self._mate1_out, self._mate2_out):
                stack.callback(stream.close)


def filter_fastqs(
    config: FilterConfig,
    r1_in: Union[PathLike, str],
    r2_in: Union[PathLike, str],
    r1_out: Union[PathLike, str],
    r2_out: Union[PathLike, str],
) -> FilterResult:
    """
    Filter a pair of FASTQ files on disk.

    Inputs may be plain or gzip-compressed; outputs are written as plain
    text.

    Parameters
    ----------
    config : FilterConfig
        Filtering options.
    r1_in, r2_in : PathLike or str
        Mate 1 and mate 2 inputs.
    r1_out, r2_out : PathLike or str
        Mate 1 and mate 2 outputs, created or overwritten.

    Returns
    -------
    FilterResult

    Raises
    ------
    StreamOpenError
        If any of the four files cannot be opened. Nothing is filtered and
        any stream already opened is closed.
    """
    opened = []
    try:
        for opener, path in (
            (open_fastq, r1_in),
            (open_fastq, r2_in),
            (open_output, r1_out),
            (open_output, r2_out),
        ):
            opened.append(opener(path))
    except Exception:
        for stream in opened:
            stream.close()
        raise

    engine = FilterEngine.from_config(config, *opened)
    result = engine.run()
    logger.info(
        f"Checked {result.stats.checked} read pairs, {result.stats.removed} removed, "
        f"{result.stats.remaining} remaining. Exit status {result.exit_code}"
    )
    return result
