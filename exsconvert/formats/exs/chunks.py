"""
EXS24 chunk walker.

File layout:
    0x00: Header record  [4 pad][u32 size][8 pad][4 magic]
          magic "SOBT"/"SOBJ" = big-endian, "TBOS"/"JBOS" = little-endian
    then: Chunks, each starting with [u32 signature][u32 size][4 magic]

The chunk type lives in bits 24-27 of the signature. The cursor advances
by size + 84 after every chunk, whatever the actual payload length.
"""

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator

from exsconvert.utils.binary import unpack_at
from exsconvert.utils.validation import EXSFormatError, validate_exs_magic

logger = logging.getLogger(__name__)

HEADER_SIZE = 20
CHUNK_HEADER_SIZE = 12
CHUNK_OVERHEAD = 84
SIZE_EXPANDED_THRESHOLD = 0x8000


class ChunkType(IntEnum):
    HEADER = 0
    ZONE = 1
    GROUP = 2
    SAMPLE = 3
    PARAMS = 4


@dataclass
class EXSHeader:
    size: int
    magic: bytes
    big_endian: bool

    @property
    def size_expanded(self) -> bool:
        return self.size > SIZE_EXPANDED_THRESHOLD


@dataclass
class ChunkHeader:
    offset: int
    signature: int
    size: int
    magic: bytes

    @property
    def chunk_type(self) -> int:
        return (self.signature & 0x0F000000) >> 24

    @property
    def extent(self) -> int:
        """Bytes from this chunk's start to the next chunk."""
        return self.size + CHUNK_OVERHEAD

    @property
    def type_name(self) -> str:
        try:
            return ChunkType(self.chunk_type).name.lower()
        except ValueError:
            return "unknown"


def read_header(data: bytes) -> EXSHeader:
    """
    Read the file header and detect byte order.

    Raises:
        EXSFormatError: On a short buffer or unknown magic
    """
    if len(data) < HEADER_SIZE:
        raise EXSFormatError(f"short read: file is {len(data)} bytes, header needs {HEADER_SIZE}")

    magic = bytes(data[16:20])
    big_endian = validate_exs_magic(magic)
    (size,) = unpack_at(data, 4, "I", big_endian)
    return EXSHeader(size=size, magic=magic, big_endian=big_endian)


def iter_chunks(data: bytes, big_endian: bool) -> Iterator[ChunkHeader]:
    """
    Walk the chunk headers of an EXS buffer.

    Stops when fewer than 84 bytes remain after the cursor.

    Raises:
        EXSFormatError: If a chunk header is cut short
    """
    cursor = 0
    while cursor + CHUNK_OVERHEAD < len(data):
        signature, size, magic = unpack_at(data, cursor, "II4s", big_endian)
        header = ChunkHeader(offset=cursor, signature=signature, size=size, magic=magic)
        logger.debug(
            "Chunk at 0x%X: type %d (%s), size %d",
            cursor,
            header.chunk_type,
            header.type_name,
            size,
        )
        yield header
        cursor += header.extent
