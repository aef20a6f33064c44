"""
Constants for paired FASTQ filtering.

Buffer sizes for the two line-reading strategies, the position of the tile
field in Illumina read headers, and the file suffixes recognised when
deriving output paths.
"""

# Line reading
# Growable mode reads in chunks of this many characters
BLOCK_SIZE = 2048
# Fixed-buffer mode holds at most UNSAFE_BLOCK_SIZE - 1 characters per line
UNSAFE_BLOCK_SIZE = 4096

# Number of lines in one FASTQ record
LINES_PER_RECORD = 4

# Illumina header layout: instrument:run:flowcell:lane:tile:x:y
HEADER_DELIMITER = ":"
TILE_FIELD_INDEX = 4

# Separator used on the command line for --remove_tiles
TILE_LIST_DELIMITER = ","

# gzip magic number, checked before opening an input
GZIP_MAGIC = b"\x1f\x8b"

# Output path derivation: longest suffix first
FASTQ_SUFFIXES = (".fastq.gz", ".fq.gz", ".fastq", ".fq")
FILTERED_SUFFIX = "_filtered.fastq"

# Log progress every this many read pairs (DEBUG level)
PROGRESS_INTERVAL = 1_000_000
