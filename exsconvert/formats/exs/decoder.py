"""
EXS24 structural decoder.

Each typed record is read at its chunk's own start offset using explicit
field-offset tables. Offsets are relative to the chunk start, which
includes the 12-byte chunk header.

Zone record (196 bytes):
    0x08: id, 0x14: name[64], 0x54: options, 0x55: root key,
    0x5A/0x5B: key low/high, 0x5D/0x5E: velocity low/high,
    0x60-0x74: sample and loop points, 0xAC: group id, 0xB0: sample index

Group record (200 bytes):
    0x08: id, 0x14: name[64], 0x54: volume, 0x59/0x5A: velocity low/high,
    0x8C-0x98: envelope 2, 0xA4: select group, 0xAC/0xAD: key low/high,
    0xB8-0xC4: envelope 1

Sample record (up to 676 bytes):
    0x08: id, 0x14: name[64], 0x58: length, 0x5C: rate, 0x60: bit depth,
    0xA4: path[256], 0x1A4: file name[256]
"""

import logging
from typing import Callable, Dict, List, Tuple

from exsconvert.formats.exs.chunks import ChunkHeader, ChunkType, iter_chunks, read_header
from exsconvert.formats.exs.params import read_params
from exsconvert.formats.exs.sequences import assign_sequence_numbers, resolve_sequences
from exsconvert.models.instrument import EXSInstrument, Group, Sample, Zone
from exsconvert.utils.binary import decode_fixed_string, require_bytes, unpack_at
from exsconvert.utils.validation import EXSFormatError

logger = logging.getLogger(__name__)

NAME_OFFSET = 0x14
NAME_SIZE = 64
PATH_SIZE = 256

ZONE_RECORD_SIZE = 196
ZONE_MIN_CHUNK_SIZE = 110
GROUP_RECORD_SIZE = 200
SAMPLE_RECORD_SIZE = 676
SAMPLE_HEADER_SIZE = 116
SAMPLE_CHUNK_SIZES = (336, 592, 600)
SAMPLE_PATH_OFFSET = 0xA4
SAMPLE_FILE_NAME_OFFSET = 0x1A4

FieldTable = List[Tuple[str, int, str]]

ZONE_FIELDS: FieldTable = [
    ("id", 0x08, "I"),
    ("options", 0x54, "B"),
    ("key", 0x55, "B"),
    ("fine_tuning", 0x56, "b"),
    ("pan", 0x57, "b"),
    ("volume", 0x58, "b"),
    ("scale", 0x59, "b"),
    ("key_low", 0x5A, "b"),
    ("key_high", 0x5B, "b"),
    ("vel_low", 0x5D, "b"),
    ("vel_high", 0x5E, "b"),
    ("sample_start", 0x60, "i"),
    ("sample_end", 0x64, "i"),
    ("loop_start", 0x68, "i"),
    ("loop_end", 0x6C, "i"),
    ("loop_crossfade", 0x70, "i"),
    ("loop_tune", 0x74, "b"),
    ("loop_options", 0x75, "I"),
    ("play_mode", 0x79, "B"),
    ("coarse_tuning", 0xA4, "b"),
    ("output", 0xA6, "b"),
    ("group_index", 0xAC, "i"),
    ("sample_index", 0xB0, "i"),
    ("sample_fade", 0xBC, "i"),
    ("offset", 0xC0, "i"),
]

GROUP_FIELDS: FieldTable = [
    ("id", 0x08, "I"),
    ("volume", 0x54, "b"),
    ("pan", 0x55, "b"),
    ("polyphony", 0x56, "b"),
    ("decay_flags", 0x57, "B"),
    ("exclusive", 0x58, "b"),
    ("vel_low", 0x59, "B"),
    ("vel_high", 0x5A, "B"),
    ("decay_time", 0x64, "I"),
    ("cutoff", 0x7D, "b"),
    ("resonance", 0x7F, "b"),
    ("attack2", 0x8C, "i"),
    ("decay2", 0x90, "i"),
    ("sustain2", 0x94, "i"),
    ("release2", 0x98, "i"),
    ("trigger", 0x9D, "b"),
    ("output", 0x9E, "b"),
    ("select_group", 0xA4, "i"),
    ("select_type", 0xA8, "B"),
    ("select_number", 0xA9, "B"),
    ("select_high", 0xAA, "B"),
    ("select_low", 0xAB, "B"),
    ("key_low", 0xAC, "B"),
    ("key_high", 0xAD, "B"),
    ("hold2", 0xB4, "i"),
    ("attack1", 0xB8, "i"),
    ("decay1", 0xBC, "i"),
    ("sustain1", 0xC0, "i"),
    ("release1", 0xC4, "i"),
]

SAMPLE_FIELDS: FieldTable = [
    ("id", 0x08, "I"),
    ("length", 0x58, "i"),
    ("rate", 0x5C, "i"),
    ("bit_depth", 0x60, "B"),
    ("type", 0x70, "i"),
]


def read_fields(data: bytes, offset: int, table: FieldTable, big_endian: bool) -> Dict[str, int]:
    """Read every (name, offset, format) entry of a table relative to offset."""
    return {
        name: unpack_at(data, offset + field_offset, fmt, big_endian)[0]
        for name, field_offset, fmt in table
    }


def read_name(data: bytes, offset: int, size: int = NAME_SIZE) -> str:
    return decode_fixed_string(data[offset : offset + size])


def read_zone(data: bytes, chunk: ChunkHeader, big_endian: bool) -> Zone:
    """
    Decode a zone record.

    Raises:
        EXSFormatError: If the chunk is smaller than 110 bytes or cut short
    """
    if chunk.size < ZONE_MIN_CHUNK_SIZE:
        raise EXSFormatError(f"invalid zone chunk size {chunk.size} at 0x{chunk.offset:X}")
    require_bytes(data, chunk.offset, ZONE_RECORD_SIZE, "zone record")

    zone = Zone(
        name=read_name(data, chunk.offset + NAME_OFFSET),
        **read_fields(data, chunk.offset, ZONE_FIELDS, big_endian),
    )
    logger.debug(
        "Zone %r: keys %d-%d, vel %d-%d, group %d, sample %d",
        zone.name,
        zone.key_low,
        zone.key_high,
        zone.vel_low,
        zone.vel_high,
        zone.group_index,
        zone.sample_index,
    )
    return zone


def read_group(data: bytes, chunk: ChunkHeader, big_endian: bool) -> Group:
    """Decode a group record."""
    require_bytes(data, chunk.offset, GROUP_RECORD_SIZE, "group record")
    group = Group(
        name=read_name(data, chunk.offset + NAME_OFFSET),
        **read_fields(data, chunk.offset, GROUP_FIELDS, big_endian),
    )
    logger.debug("Group %r: id %d, select group %d", group.name, group.id, group.select_group)
    return group


def read_sample(data: bytes, chunk: ChunkHeader, big_endian: bool) -> Sample:
    """
    Decode a sample record.

    The path and file name fields are only read when the chunk extends
    over them; short 336-byte chunks carry no file name, in which case the
    sample name stands in for it.

    Raises:
        EXSFormatError: If the chunk size is not 336, 592 or 600 bytes
    """
    if chunk.size not in SAMPLE_CHUNK_SIZES:
        raise EXSFormatError(f"invalid sample chunk size {chunk.size} at 0x{chunk.offset:X}")
    require_bytes(data, chunk.offset, SAMPLE_HEADER_SIZE, "sample record")

    start = chunk.offset
    end = min(start + chunk.extent, len(data))
    sample = Sample(
        name=read_name(data, start + NAME_OFFSET),
        **read_fields(data, start, SAMPLE_FIELDS, big_endian),
    )
    if start + SAMPLE_PATH_OFFSET + PATH_SIZE <= end:
        sample.path = read_name(data, start + SAMPLE_PATH_OFFSET, PATH_SIZE)
    if start + SAMPLE_FILE_NAME_OFFSET + PATH_SIZE <= end:
        sample.file_name = read_name(data, start + SAMPLE_FILE_NAME_OFFSET, PATH_SIZE)
    if not sample.file_name:
        sample.file_name = sample.name

    logger.debug("Sample %r: file %r, path %r", sample.name, sample.file_name, sample.path)
    return sample


class EXSDecoder:
    """
    Decoder turning an EXS buffer into an EXSInstrument.

    Example:
        instrument = EXSDecoder().decode(data, "Piano")
        print(len(instrument.zones))
    """

    def __init__(self):
        self._handlers: Dict[int, Callable[[EXSInstrument, bytes, ChunkHeader], None]] = {
            ChunkType.HEADER: self._on_header,
            ChunkType.ZONE: self._on_zone,
            ChunkType.GROUP: self._on_group,
            ChunkType.SAMPLE: self._on_sample,
            ChunkType.PARAMS: self._on_params,
        }

    def decode(self, data: bytes, name: str = "") -> EXSInstrument:
        """
        Decode a complete EXS file.

        Args:
            data: Raw file contents
            name: Instrument name (usually the file stem)

        Returns:
            Decoded instrument with round-robin sequences resolved

        Raises:
            EXSFormatError: On unknown magic, bad chunk sizes or short reads
        """
        header = read_header(data)
        instrument = EXSInstrument(
            name=name,
            big_endian=header.big_endian,
            size_expanded=header.size_expanded,
            size=len(data),
        )

        for chunk in iter_chunks(data, header.big_endian):
            handler = self._handlers.get(chunk.chunk_type)
            if handler is None:
                logger.debug("Skipping unknown chunk type %d at 0x%X", chunk.chunk_type, chunk.offset)
                continue
            handler(instrument, data, chunk)

        instrument.sequences = resolve_sequences(instrument.groups)
        assign_sequence_numbers(instrument.groups, instrument.sequences)

        logger.debug(
            "%s: %d groups, %d zones, %d samples",
            name,
            len(instrument.groups),
            len(instrument.zones),
            len(instrument.samples),
        )
        return instrument

    def _on_header(self, instrument: EXSInstrument, data: bytes, chunk: ChunkHeader) -> None:
        pass

    def _on_zone(self, instrument: EXSInstrument, data: bytes, chunk: ChunkHeader) -> None:
        instrument.zones.append(read_zone(data, chunk, instrument.big_endian))

    def _on_group(self, instrument: EXSInstrument, data: bytes, chunk: ChunkHeader) -> None:
        instrument.groups.append(read_group(data, chunk, instrument.big_endian))

    def _on_sample(self, instrument: EXSInstrument, data: bytes, chunk: ChunkHeader) -> None:
        instrument.samples.append(read_sample(data, chunk, instrument.big_endian))

    def _on_params(self, instrument: EXSInstrument, data: bytes, chunk: ChunkHeader) -> None:
        instrument.params = read_params(data, chunk.offset, instrument.big_endian)
