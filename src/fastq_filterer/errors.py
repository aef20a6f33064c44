"""Exceptions raised while configuring or running a paired FASTQ filter."""

from typing import Optional


class FastqFilterError(Exception):
    """Base class for all fastq_filterer errors."""
    pass


class ConfigurationError(FastqFilterError):
    """Raised when the filter is configured with missing or invalid options."""
    pass


class StreamOpenError(FastqFilterError):
    """Raised when an input cannot be read or an output cannot be written."""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not open {path}: {reason}")


class DesyncError(FastqFilterError):
    """
    Raised when one mate file ends before the other.

    Parameters
    ----------
    line : int
        Approximate line offset (read pairs checked x 4) where the
        mismatch was detected.
    stats : RunStats, optional
        Counters at the point the run stopped.
    """

    def __init__(self, line: int, stats: Optional[object] = None):
        self.line = line
        self.stats = stats
        super().__init__(f"Input fastqs have differing numbers of reads, from line {line}")
