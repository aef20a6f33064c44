"""
FASTQ records and read pairs.

A record keeps its four lines exactly as read, terminators included, so a
record that passes through the filter untouched is written back byte for
byte.
"""

from dataclasses import dataclass
from typing import NamedTuple, Optional

from .constants import HEADER_DELIMITER, TILE_FIELD_INDEX


@dataclass(frozen=True)
class FastqRecord:
    """
    One four-line FASTQ record.

    Parameters
    ----------
    header : str
        Read name line, e.g. ``@INST:1:FLOW:2:1101:100:200 1:N:0:1``.
    sequence : str
        Residue line.
    strand : str
        Separator line, conventionally ``+``.
    quality : str
        Quality line, expected (not enforced) to match ``sequence`` in length.

    Notes
    -----
    All four lines carry their original line terminator. The end-of-stream
    sentinel is the record whose four lines are empty, see `eof`.

    Examples
    --------
    >>> rec = FastqRecord('@r1\\n', 'ACGT\\n', '+\\n', 'IIII\\n')
    >>> rec.seq_len
    4
    >>> FastqRecord.eof().is_eof
    True
    """

    header: str
    sequence: str
    strand: str
    quality: str

    @classmethod
    def eof(cls) -> "FastqRecord":
        """Return the end-of-stream sentinel."""
        return cls("", "", "", "")

    @property
    def is_eof(self) -> bool:
        """True if this is the end-of-stream sentinel."""
        return self.header == ""

    @property
    def seq_len(self) -> int:
        """Number of residues, line terminator excluded."""
        return len(self.sequence.rstrip("\r\n"))

    @property
    def tile_id(self) -> Optional[str]:
        """Tile field of the header, or None if the header is too short."""
        return tile_id(self.header)

    def lines(self):
        """The four lines in file order."""
        return (self.header, self.sequence, self.strand, self.quality)

    def write(self, handle) -> None:
        """Write the record to an open text stream."""
        handle.write(self.header)
        handle.write(self.sequence)
        handle.write(self.strand)
        handle.write(self.quality)


class ReadPair(NamedTuple):
    """Records at the same position in the mate 1 and mate 2 streams."""

    mate1: FastqRecord
    mate2: FastqRecord


def tile_id(header: str) -> Optional[str]:
    """
    Extract the tile identifier from an Illumina read header.

    The header is split on ``:`` and field 4 (0-indexed) returned, following
    ``instrument:run:flowcell:lane:tile:x:y``. The field is not validated:
    a header with only five fields yields the tile with its line terminator
    attached, and a header with fewer than five fields yields None.

    Parameters
    ----------
    header : str
        Header line of a FASTQ record.

    Returns
    -------
    str or None
        The tile field, or None if the header has no such field.

    Examples
    --------
    >>> tile_id('@INST:1:FLOW:2:1101:100:200 1:N:0\\n')
    '1101'
    >>> tile_id('@read_1\\n') is None
    True
    """
    fields = header.split(HEADER_DELIMITER)
    if len(fields) <= TILE_FIELD_INDEX:
        return None
    return fields[TILE_FIELD_INDEX]
