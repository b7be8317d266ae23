"""
EXS24 instrument file reader.

Reads .exs files and converts them to the EXSInstrument model.
"""

from pathlib import Path
from typing import Any, Dict, Union

from exsconvert.formats.exs.chunks import HEADER_SIZE, iter_chunks, read_header
from exsconvert.formats.exs.decoder import EXSDecoder
from exsconvert.models.instrument import EXSInstrument
from exsconvert.utils.validation import EXSFormatError

EXS_SUFFIXES = (".exs", ".EXS")


class EXSReader:
    """
    Reader for Logic EXS24 instrument files.

    Example:
        instrument = EXSReader.read("Piano.exs")
        print(f"{instrument.name}: {len(instrument.zones)} zones")
    """

    def __init__(self):
        self.decoder = EXSDecoder()
        self._raw_data: bytes = b""

    @classmethod
    def read(cls, filepath: Union[str, Path]) -> EXSInstrument:
        """
        Read an EXS file and return the decoded instrument.

        Args:
            filepath: Path to .exs file

        Returns:
            Decoded EXSInstrument named after the file stem
        """
        reader = cls()
        return reader.parse_file(filepath)

    @staticmethod
    def can_read(filepath: Union[str, Path]) -> bool:
        """Check whether a file has an EXS suffix and a known header magic."""
        filepath = Path(filepath)
        if filepath.suffix not in EXS_SUFFIXES or not filepath.is_file():
            return False
        with open(filepath, "rb") as f:
            head = f.read(HEADER_SIZE)
        try:
            read_header(head)
        except EXSFormatError:
            return False
        return True

    def parse_file(self, filepath: Union[str, Path]) -> EXSInstrument:
        """
        Parse an EXS file.

        Raises:
            FileNotFoundError: If the file does not exist
            EXSFormatError: If the file is not a valid EXS instrument
        """
        filepath = Path(filepath)

        if not filepath.exists():
            raise FileNotFoundError(f"File not found: {filepath}")

        with open(filepath, "rb") as f:
            self._raw_data = f.read()

        return self.parse_bytes(self._raw_data, filepath.stem)

    def parse_bytes(self, data: bytes, name: str = "") -> EXSInstrument:
        """
        Parse EXS data from bytes.

        Args:
            data: Raw EXS file contents
            name: Instrument name

        Returns:
            Decoded EXSInstrument
        """
        self._raw_data = data
        return self.decoder.decode(data, name)

    @classmethod
    def get_file_info(cls, filepath: Union[str, Path]) -> Dict[str, Any]:
        """
        Describe the container structure of an EXS file without projecting it.

        Returns:
            Dict with byte order, size and per-type chunk counts
        """
        filepath = Path(filepath)
        with open(filepath, "rb") as f:
            data = f.read()

        header = read_header(data)
        counts: Dict[str, int] = {}
        for chunk in iter_chunks(data, header.big_endian):
            counts[chunk.type_name] = counts.get(chunk.type_name, 0) + 1

        return {
            "file": str(filepath),
            "magic": header.magic.decode("ascii"),
            "big_endian": header.big_endian,
            "size_expanded": header.size_expanded,
            "size": len(data),
            "chunks": counts,
        }
