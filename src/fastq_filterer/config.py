"""
Filter configuration.

`FilterConfig` is read-only for the whole run and shared by reference
between the engine and whatever writes the run summary.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional

from .constants import TILE_LIST_DELIMITER
from .errors import ConfigurationError


def parse_tile_list(remove_tiles: Optional[str]) -> FrozenSet[str]:
    """
    Parse a comma-separated tile list, e.g. ``'1101,1102'``.

    Empty entries are dropped and surrounding whitespace stripped. None or
    an empty string gives an empty set, which disables tile filtering.
    """
    if not remove_tiles:
        return frozenset()
    tiles = (t.strip() for t in remove_tiles.split(TILE_LIST_DELIMITER))
    return frozenset(t for t in tiles if t)


@dataclass(frozen=True)
class FilterConfig:
    """
    Options controlling a filtering run.

    Parameters
    ----------
    threshold : int
        Minimum sequence length, exclusive. Both mates must be strictly
        longer than this to be kept.
    tile_exclusion_set : frozenset of str, default empty
        Tiles whose reads are removed. Empty disables tile filtering.
    trim_len_mate1, trim_len_mate2 : int, optional
        Truncate kept mate 1 / mate 2 records to this many residues.
        None or 0 disables trimming for that mate.
    unsafe_fixed_buffer : bool, default False
        Read lines into a fixed-size buffer, truncating overlong lines.
    """

    threshold: int
    tile_exclusion_set: FrozenSet[str] = field(default_factory=frozenset)
    trim_len_mate1: Optional[int] = None
    trim_len_mate2: Optional[int] = None
    unsafe_fixed_buffer: bool = False

    def __post_init__(self):
        if self.threshold is None:
            raise ConfigurationError("A filter threshold is required")
        if self.threshold < 0:
            raise ConfigurationError(f"threshold must be non-negative, got {self.threshold}")
        for name in ('trim_len_mate1', 'trim_len_mate2'):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise ConfigurationError(f"{name} must be non-negative, got {value}")
            # 0 disables trimming
            if value == 0:
                object.__setattr__(self, name, None)
        # Accept any iterable of tiles, store a frozenset
        object.__setattr__(self, 'tile_exclusion_set', frozenset(self.tile_exclusion_set))

    @classmethod
    def from_options(
        cls,
        threshold: Optional[int],
        remove_tiles: Optional[str] = None,
        trim_r1: Optional[int] = None,
        trim_r2: Optional[int] = None,
        unsafe: bool = False,
    ) -> "FilterConfig":
        """
        Build a config from command-line style options.

        Parameters
        ----------
        threshold : int or None
            Required; None raises `ConfigurationError`.
        remove_tiles : str, optional
            Comma-separated tile list.
        trim_r1, trim_r2 : int, optional
            Trim lengths; 0 or None disables trimming for that mate.
        unsafe : bool, default False
            Use fixed-buffer line reading.

        Raises
        ------
        ConfigurationError
            If the threshold is missing or any value is negative.
        """
        if threshold is None:
            raise ConfigurationError("Missing required argument: threshold")
        return cls(
            threshold=threshold,
            tile_exclusion_set=parse_tile_list(remove_tiles),
            trim_len_mate1=trim_r1,
            trim_len_mate2=trim_r2,
            unsafe_fixed_buffer=unsafe,
        )

    @property
    def tile_list(self) -> str:
        """Exclusion set as a sorted comma-separated string."""
        return TILE_LIST_DELIMITER.join(sorted(self.tile_exclusion_set))

    def describe(self) -> List[str]:
        """Human readable summary lines, logged at the start of a run."""
        lines = [f"Filter threshold: {self.threshold}"]
        if self.trim_len_mate1 is not None:
            lines.append(f"Trimming R1 to {self.trim_len_mate1}")
        if self.trim_len_mate2 is not None:
            lines.append(f"Trimming R2 to {self.trim_len_mate2}")
        if self.tile_exclusion_set:
            lines.append(f"Removing tiles: {self.tile_list}")
        if self.unsafe_fixed_buffer:
            lines.append("Using fixed-size line buffer (long lines will be truncated)")
        return lines
