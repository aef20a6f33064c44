"""Shared fixtures: small synthetic FASTQ files and in-memory streams."""

import gzip
import io
from pathlib import Path
from typing import List, Sequence

import pytest

from fastq_filterer import FastqRecord


def make_record(seq: str, tile: str = "1101", idx: int = 1, mate: int = 1) -> FastqRecord:
    """Build a well-formed record with an Illumina style header."""
    return FastqRecord(
        header=f"@INST:1:FLOW:2:{tile}:{idx}:200 {mate}:N:0:ACGT\n",
        sequence=seq + "\n",
        strand="+\n",
        quality="I" * len(seq) + "\n",
    )


def fastq_text(records: Sequence[FastqRecord]) -> str:
    return "".join("".join(r.lines()) for r in records)


def write_fastq(path: Path, records: Sequence[FastqRecord], gz: bool = False) -> Path:
    text = fastq_text(records)
    if gz:
        with gzip.open(path, "wt") as f:
            f.write(text)
    else:
        path.write_text(text)
    return path


class CapturingStringIO(io.StringIO):
    """StringIO that keeps its contents after being closed."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.contents = None

    def close(self):
        if not self.closed:
            self.contents = self.getvalue()
        super().close()


def mate_records(lengths: List[int], mate: int, tiles: Sequence[str] = ()) -> List[FastqRecord]:
    tiles = list(tiles) or ["1101"] * len(lengths)
    return [
        make_record("ACGT" * (n // 4) + "ACGT"[: n % 4], tile=tile, idx=i, mate=mate)
        for i, (n, tile) in enumerate(zip(lengths, tiles))
    ]


@pytest.fixture
def paired_files(tmp_path):
    """
    Write a mate 1 / mate 2 pair of FASTQ files.

    Returns a function ``(r1_lengths, r2_lengths, tiles=(), gz=False) -> (r1, r2)``.
    """
    def _write(r1_lengths, r2_lengths, tiles=(), gz=False):
        suffix = ".fastq.gz" if gz else ".fastq"
        r1 = write_fastq(tmp_path / f"sample_R1{suffix}", mate_records(r1_lengths, 1, tiles), gz=gz)
        r2 = write_fastq(tmp_path / f"sample_R2{suffix}", mate_records(r2_lengths, 2, tiles), gz=gz)
        return r1, r2

    return _write
