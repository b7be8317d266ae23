"""
XPM program reader.

Parses programs written by XPMWriter (or the MPC) back into the Program
model. Elements the model does not know are ignored.
"""

import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any, Optional, Union

from exsconvert.formats.xpm import tags
from exsconvert.models.program import (
    LFO,
    AudioRoute,
    Instrument,
    Layer,
    PadGroup,
    PadNote,
    Program,
    ProgramType,
    Version,
)

logger = logging.getLogger(__name__)


def parse_value(text: Optional[str], current: Any) -> Any:
    """Convert element text to the type of the model's current value."""
    if text is None:
        return current
    text = text.strip()
    if isinstance(current, bool):
        return text.lower() == "true"
    if isinstance(current, int):
        return int(float(text))
    if isinstance(current, float):
        return float(text)
    return text


class XPMReader:
    """
    Reader for MPC XPM program files.

    Example:
        program = XPMReader.read("out/Piano/Piano.xpm")
        print(program.program_type, len(program.instruments))
    """

    @classmethod
    def read(cls, filepath: Union[str, Path]) -> Program:
        """
        Read an XPM file.

        Raises:
            FileNotFoundError: If the file does not exist
            ET.ParseError: If the file is not well-formed XML
        """
        filepath = Path(filepath)
        if not filepath.exists():
            raise FileNotFoundError(f"File not found: {filepath}")
        return cls.parse_element(ET.parse(filepath).getroot())

    @classmethod
    def parse_string(cls, xml_text: str) -> Program:
        return cls.parse_element(ET.fromstring(xml_text))

    @classmethod
    def parse_element(cls, root: ET.Element) -> Program:
        program_element = root.find(tags.PROGRAM)
        if program_element is None:
            raise ValueError("Invalid XPM file: missing Program element")

        program = Program(
            program_type=ProgramType(program_element.get(tags.TYPE_ATTRIBUTE, "Keygroup")),
            name=program_element.findtext(tags.PROGRAM_NAME, default=""),
        )

        version = root.find(tags.VERSION)
        if version is not None:
            program.version = Version()
            cls._read_fields(version, program.version, tags.VERSION_TAGS)

        cls._read_fields(program_element, program, tags.PROGRAM_HEAD_TAGS)
        cls._read_fields(program_element, program, tags.PROGRAM_TAIL_TAGS)

        for element in program_element.iterfind(f"{tags.INSTRUMENTS}/{tags.INSTRUMENT}"):
            program.instruments.append(cls._read_instrument(element))

        note_map = program_element.find(tags.PAD_NOTE_MAP)
        if note_map is not None:
            program.pad_note_map = [
                PadNote(
                    number=int(pad.get(tags.NUMBER_ATTRIBUTE, "0")),
                    note=int(pad.findtext("Note", default="0")),
                )
                for pad in note_map.iterfind(tags.PAD_NOTE)
            ]

        group_map = program_element.find(tags.PAD_GROUP_MAP)
        if group_map is not None:
            program.pad_group_map = [
                PadGroup(
                    number=int(pad.get(tags.NUMBER_ATTRIBUTE, "0")),
                    group=int(pad.findtext("Group", default="0")),
                )
                for pad in group_map.iterfind(tags.PAD_GROUP)
            ]

        logger.debug("Read %s program %r", program.program_type.value, program.name)
        return program

    @classmethod
    def _read_fields(cls, element: ET.Element, target: Any, table: tags.TagTable) -> None:
        for tag, attribute in table:
            child = element.find(tag)
            if child is None:
                continue
            current = getattr(target, attribute)
            if isinstance(current, AudioRoute):
                cls._read_fields(child, current, tags.AUDIO_ROUTE_TAGS)
            elif isinstance(current, LFO):
                cls._read_fields(child, current, tags.LFO_TAGS)
            else:
                setattr(target, attribute, parse_value(child.text, current))

    @classmethod
    def _read_instrument(cls, element: ET.Element) -> Instrument:
        instrument = Instrument(number=int(element.get(tags.NUMBER_ATTRIBUTE, "1")))
        cls._read_fields(element, instrument, tags.INSTRUMENT_TAGS)
        for layer_element in element.iterfind(f"{tags.LAYERS}/{tags.LAYER}"):
            layer = Layer(number=int(layer_element.get(tags.NUMBER_ATTRIBUTE, "1")))
            cls._read_fields(layer_element, layer, tags.LAYER_TAGS)
            instrument.layers.append(layer)
        return instrument
