"""
Inclusion and transform policies.

An inclusion policy decides whether a read pair is kept; a transform policy
rewrites one kept record before it is written. Both are chosen once from a
`FilterConfig` and held by the engine for the whole run. The module-level
functions are the pure predicates and rewrites the policy classes wrap.
"""

import logging
from abc import ABC, abstractmethod
from typing import AbstractSet, Optional

from .fastq_record import FastqRecord, ReadPair

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Predicates and rewrites
# ---------------------------------------------------------------------------

def length_only(pair: ReadPair, threshold: int) -> bool:
    """
    Keep a pair only if both mates are longer than `threshold`.

    Lengths count residues, so a sequence of exactly `threshold` residues
    is excluded.

    Examples
    --------
    >>> r1 = FastqRecord('@a\\n', 'ACGTAC\\n', '+\\n', 'IIIIII\\n')
    >>> r2 = FastqRecord('@a\\n', 'ACG\\n', '+\\n', 'III\\n')
    >>> length_only(ReadPair(r1, r2), threshold=5)
    False
    """
    return pair.mate1.seq_len > threshold and pair.mate2.seq_len > threshold


def length_and_tile(pair: ReadPair, threshold: int, tile_exclusion_set: AbstractSet[str]) -> bool:
    """
    Apply `length_only`, then drop pairs whose mate 1 came from an excluded tile.

    Only mate 1's header is inspected. A header without a tile field never
    matches the exclusion set.
    """
    if not length_only(pair, threshold):
        return False
    return pair.mate1.tile_id not in tile_exclusion_set


def identity(record: FastqRecord) -> FastqRecord:
    return record


def truncate(record: FastqRecord, trim_len: int) -> FastqRecord:
    """
    Truncate sequence and quality to `trim_len` residues.

    A record is rewritten only if its sequence line, terminator included, is
    longer than ``trim_len + 1``. The quality line is cut at the same
    position. Header and strand lines are never modified, and shorter records
    are returned as they are.

    Parameters
    ----------
    record : FastqRecord
        Record to truncate.
    trim_len : int
        Maximum number of residues to keep.

    Returns
    -------
    FastqRecord
        The truncated record, or `record` itself if no truncation was needed.
    """
    if len(record.sequence) <= trim_len + 1:
        return record
    return FastqRecord(
        header=record.header,
        sequence=record.sequence[:trim_len] + "\n",
        strand=record.strand,
        quality=record.quality[:trim_len] + "\n",
    )


# ---------------------------------------------------------------------------
# Policy classes
# ---------------------------------------------------------------------------

class InclusionPolicy(ABC):
    """Decides whether a read pair is kept."""

    @abstractmethod
    def keep(self, pair: ReadPair) -> bool:
        pass

    def __call__(self, pair: ReadPair) -> bool:
        return self.keep(pair)


class LengthPolicy(InclusionPolicy):
    """Keep pairs where both mates are longer than `threshold`."""

    def __init__(self, threshold: int):
        self.threshold = threshold

    def keep(self, pair: ReadPair) -> bool:
        return length_only(pair, self.threshold)

    def __repr__(self) -> str:
        return f"LengthPolicy(threshold={self.threshold})"


class LengthAndTilePolicy(LengthPolicy):
    """Length check, then exclusion of reads from the given tiles."""

    def __init__(self, threshold: int, tile_exclusion_set: AbstractSet[str]):
        super().__init__(threshold)
        self.tile_exclusion_set = frozenset(tile_exclusion_set)

    def keep(self, pair: ReadPair) -> bool:
        return length_and_tile(pair, self.threshold, self.tile_exclusion_set)

    def __repr__(self) -> str:
        tiles = ",".join(sorted(self.tile_exclusion_set))
        return f"LengthAndTilePolicy(threshold={self.threshold}, tiles={tiles})"


class TransformPolicy(ABC):
    """Rewrites one kept record before it is written."""

    @abstractmethod
    def apply(self, record: FastqRecord) -> FastqRecord:
        pass

    def __call__(self, record: FastqRecord) -> FastqRecord:
        return self.apply(record)


class IdentityTransform(TransformPolicy):

    def apply(self, record: FastqRecord) -> FastqRecord:
        return identity(record)

    def __repr__(self) -> str:
        return "IdentityTransform()"


class TruncateTransform(TransformPolicy):
    """Truncate records to at most `trim_len` residues."""

    def __init__(self, trim_len: int):
        if trim_len < 0:
            raise ValueError(f"trim_len must be non-negative, got {trim_len}")
        self.trim_len = trim_len

    def apply(self, record: FastqRecord) -> FastqRecord:
        return truncate(record, self.trim_len)

    def __repr__(self) -> str:
        return f"TruncateTransform(trim_len={self.trim_len})"


def build_inclusion_policy(config) -> InclusionPolicy:
    """
    Select the inclusion policy for a `FilterConfig`.

    The tile-aware policy is used only when the exclusion set is non-empty;
    an empty set is the same as no tile filtering.
    """
    if config.tile_exclusion_set:
        policy = LengthAndTilePolicy(config.threshold, config.tile_exclusion_set)
    else:
        policy = LengthPolicy(config.threshold)
    logger.debug(f"Inclusion policy: {policy!r}")
    return policy


def build_transform_policy(trim_len: Optional[int]) -> TransformPolicy:
    """Truncate to `trim_len` if given, otherwise pass records through."""
    if trim_len is None:
        return IdentityTransform()
    return TruncateTransform(trim_len)
