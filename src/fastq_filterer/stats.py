"""
Read pair counters for a filtering run.

`StatsAccumulator` is updated by the engine for every pair it checks; the
frozen `RunStats` snapshot is what callers read once the run is over.
"""

from dataclasses import dataclass

import pandas as pd


@dataclass(frozen=True)
class RunStats:
    """
    Final (or intermediate) counters of a run.

    Attributes
    ----------
    checked : int
        Read pairs evaluated by the inclusion policy.
    removed : int
        Read pairs discarded.
    remaining : int
        Read pairs written to the outputs.
    """

    checked: int = 0
    removed: int = 0
    remaining: int = 0

    @property
    def removed_fraction(self) -> float:
        """Fraction of checked pairs that were removed (0.0 if none checked)."""
        if self.checked == 0:
            return 0.0
        return self.removed / self.checked


class StatsAccumulator:
    """
    Counters for read pairs checked, removed and kept.

    All counters start at zero and only ever increase, and
    ``checked == removed + remaining`` holds after every update.

    Examples
    --------
    >>> acc = StatsAccumulator()
    >>> acc.record_kept()
    >>> acc.record_removed()
    >>> acc.snapshot()
    RunStats(checked=2, removed=1, remaining=1)
    >>> acc.counts()['read_pairs_remaining']
    1
    """

    def __init__(self):
        self._checked = 0
        self._removed = 0
        self._remaining = 0

    def record_kept(self) -> None:
        """Count one pair that passed the inclusion policy."""
        self._checked += 1
        self._remaining += 1

    def record_removed(self) -> None:
        """Count one pair that failed the inclusion policy."""
        self._checked += 1
        self._removed += 1

    @property
    def checked(self) -> int:
        return self._checked

    @property
    def removed(self) -> int:
        return self._removed

    @property
    def remaining(self) -> int:
        return self._remaining

    def snapshot(self) -> RunStats:
        """Return the current counters as an immutable `RunStats`."""
        return RunStats(
            checked=self._checked,
            removed=self._removed,
            remaining=self._remaining,
        )

    def counts(self) -> pd.Series:
        """
        Export the counters as a Series.

        Returns
        -------
        pd.Series
            Integer counts indexed by ``read_pairs_checked``,
            ``read_pairs_removed`` and ``read_pairs_remaining``.
        """
        return stats_to_series(self.snapshot())


def stats_to_series(stats: RunStats) -> pd.Series:
    """Counters of `stats` as an integer Series keyed like the stats file."""
    return pd.Series(
        {
            'read_pairs_checked': stats.checked,
            'read_pairs_removed': stats.removed,
            'read_pairs_remaining': stats.remaining,
        },
        dtype=int,
        name='count',
    )
