"""
Run summary ("stats file") output.

The text format is one ``key value`` pair per line and is read by
downstream pipeline steps, so its keys and order are fixed. The CSV
format holds the same pairs in ``key,value`` columns.
"""

import logging
from dataclasses import dataclass
from os import PathLike
from pathlib import Path
from typing import List, Literal, Tuple, Union

import pandas as pd

from .config import FilterConfig
from .errors import StreamOpenError
from .stats import RunStats

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunPaths:
    r1_in: Path
    r1_out: Path
    r2_in: Path
    r2_out: Path


def stats_items(paths: RunPaths, stats: RunStats, config: FilterConfig) -> List[Tuple[str, object]]:
    """
    Key/value pairs of a run summary, in stats-file order.

    Trim lengths and the tile list are only included if set.
    """
    items = [
        ('r1i', paths.r1_in),
        ('r1o', paths.r1_out),
        ('r2i', paths.r2_in),
        ('r2o', paths.r2_out),
        ('read_pairs_checked', stats.checked),
        ('read_pairs_removed', stats.removed),
        ('read_pairs_remaining', stats.remaining),
    ]
    if config.trim_len_mate1 is not None:
        items.append(('trim_r1', config.trim_len_mate1))
    if config.trim_len_mate2 is not None:
        items.append(('trim_r2', config.trim_len_mate2))
    if config.tile_exclusion_set:
        items.append(('remove_tiles', config.tile_list))
    return items


def write_stats(
    stats_file: Union[PathLike, str],
    paths: RunPaths,
    stats: RunStats,
    config: FilterConfig,
    format: Literal['text', 'csv'] = 'text',
) -> None:
    """
    Write the run summary to `stats_file`.

    Parameters
    ----------
    stats_file : PathLike or str
        Output path.
    paths : RunPaths
        Resolved input and output paths of the run.
    stats : RunStats
        Final counters.
    config : FilterConfig
        Configuration the run used.
    format : {'text', 'csv'}, default 'text'
        Output format.

    Raises
    ------
    StreamOpenError
        If `stats_file` cannot be created.
    """
    if format not in ('text', 'csv'):
        raise ValueError(f"Unknown stats format: {format}")

    items = stats_items(paths, stats, config)

    try:
        f = open(stats_file, 'w', newline='')
    except OSError as e:
        raise StreamOpenError(stats_file, e.strerror or str(e)) from e

    with f:
        if format == 'text':
            for key, value in items:
                f.write(f"{key} {value}\n")
        else:
            df = pd.DataFrame(items, columns=['key', 'value'])
            df.to_csv(f, index=False)

    logger.info(f"Wrote stats file {stats_file}")
