"""
Line and record reading for FASTQ streams.

Provides `RecordReader`, which pulls one four-line record at a time from an
open text stream, and helpers to open plain or gzip-compressed inputs and
plain-text outputs.
"""

import gzip
import io
import logging
from os import PathLike
from typing import IO, Iterator, Union

from .constants import BLOCK_SIZE, GZIP_MAGIC, LINES_PER_RECORD, UNSAFE_BLOCK_SIZE
from .errors import StreamOpenError
from .fastq_record import FastqRecord

logger = logging.getLogger(__name__)

# Unknown bytes round-trip unchanged between input and output
TEXT_ENCODING = "utf-8"
TEXT_ERRORS = "surrogateescape"
# Only \n ends a line, and nothing is translated
TEXT_NEWLINE = "\n"


class RecordReader:
    """
    Read FASTQ records from one text stream.

    Two line-reading strategies are supported and fixed for the lifetime of
    the reader:

    - growable (default): a line is assembled from chunks of `BLOCK_SIZE`
      characters until a chunk ends in a newline or the stream is exhausted.
      Lines of any length are returned whole.
    - fixed-buffer (``unsafe=True``): each call makes a single read of at most
      ``UNSAFE_BLOCK_SIZE - 1`` characters. A longer physical line is
      silently truncated, and the rest of it is returned by the next call.
      This is faster but only correct for inputs known to have short lines.

    Parameters
    ----------
    handle : text stream
        Open, readable text stream. Ownership passes to the reader; `close`
        closes it.
    unsafe : bool, default False
        Use the fixed-buffer strategy.

    Examples
    --------
    >>> import io
    >>> reader = RecordReader(io.StringIO('@r1\\nACGT\\n+\\nIIII\\n'))
    >>> reader.read_record().sequence
    'ACGT\\n'
    >>> reader.read_record().is_eof
    True
    """

    def __init__(self, handle: IO[str], unsafe: bool = False):
        self._handle = handle
        self.unsafe = unsafe
        self.read_line = self._read_line_fixed if unsafe else self._read_line_growable

    def _read_line_growable(self) -> str:
        """Read one whole line, or '' at end of stream."""
        parts = []
        while True:
            part = self._handle.readline(BLOCK_SIZE)
            if not part:
                break
            parts.append(part)
            if part.endswith("\n"):
                break
        return "".join(parts)

    def _read_line_fixed(self) -> str:
        """Read at most UNSAFE_BLOCK_SIZE - 1 characters of a line."""
        return self._handle.readline(UNSAFE_BLOCK_SIZE - 1)

    def read_record(self) -> FastqRecord:
        """
        Read the next record.

        Returns
        -------
        FastqRecord
            The next record, or the end-of-stream sentinel if the first
            line read is empty. A record truncated by the end of the stream
            is returned with its missing lines empty.
        """
        lines = [self.read_line() for _ in range(LINES_PER_RECORD)]
        if not lines[0]:
            return FastqRecord.eof()
        return FastqRecord(*lines)

    def __iter__(self) -> Iterator[FastqRecord]:
        while True:
            record = self.read_record()
            if record.is_eof:
                return
            yield record

    def close(self) -> None:
        self._handle.close()

    @property
    def closed(self) -> bool:
        return self._handle.closed

    def __enter__(self) -> "RecordReader":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


class _InputStream(io.TextIOWrapper):
    """Text stream over a decompressor that also closes the file beneath it."""

    def __init__(self, buffer, source, **kwargs):
        super().__init__(buffer, **kwargs)
        self._source = source

    def close(self) -> None:
        try:
            super().close()
        finally:
            self._source.close()


def open_fastq(path: Union[PathLike, str]) -> IO[str]:
    """
    Open a FASTQ file for reading, decompressing it if it is gzipped.

    Compression is detected from the first bytes of the content, not the
    name. The file is opened only once and the magic number is peeked, not
    consumed, so pipes and process substitutions can be read. The returned
    stream does no newline translation.

    Raises
    ------
    StreamOpenError
        If the file cannot be opened.
    """
    try:
        source = open(path, "rb")
    except OSError as e:
        raise StreamOpenError(path, e.strerror or str(e)) from e

    try:
        magic = source.peek(len(GZIP_MAGIC))[:len(GZIP_MAGIC)]
        if magic == GZIP_MAGIC:
            logger.debug(f"Detected gzipped input: {path}")
            return _InputStream(
                gzip.GzipFile(fileobj=source, mode="rb"),
                source,
                encoding=TEXT_ENCODING,
                errors=TEXT_ERRORS,
                newline=TEXT_NEWLINE,
            )
        logger.debug(f"Detected plain input: {path}")
        return io.TextIOWrapper(source, encoding=TEXT_ENCODING, errors=TEXT_ERRORS, newline=TEXT_NEWLINE)
    except OSError as e:
        source.close()
        raise StreamOpenError(path, e.strerror or str(e)) from e


def open_output(path: Union[PathLike, str]) -> IO[str]:
    """
    Open a plain-text FASTQ output for writing.

    Raises
    ------
    StreamOpenError
        If the file cannot be created.
    """
    try:
        return open(path, "w", encoding=TEXT_ENCODING, errors=TEXT_ERRORS, newline=TEXT_NEWLINE)
    except OSError as e:
        raise StreamOpenError(path, e.strerror or str(e)) from e
