"""
XPM program writer.

Serializes the Program model to MPC XML with ElementTree. Floats are
written with six decimals, booleans as True/False.
"""

import json
import logging
import xml.etree.ElementTree as ET
from enum import Enum
from pathlib import Path
from typing import Any, Union

from exsconvert.formats.xpm import tags
from exsconvert.models.program import LFO, AudioRoute, Instrument, Layer, Program
from exsconvert.utils.units import format_decimal

logger = logging.getLogger(__name__)

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'
UNIVERSAL_PAD = 32512


def format_value(value: Any) -> str:
    """Render a model value as XPM element text."""
    if isinstance(value, bool):
        return "True" if value else "False"
    if isinstance(value, int):
        return str(int(value))
    if isinstance(value, float):
        return format_decimal(value)
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def program_pads_json(pad_count: int = 128) -> str:
    """Build the JSON pad blob stored in the ProgramPads element."""
    pads = {
        "ProgramPads": {
            "Universal": {"value0": True},
            "Type": {"value0": 1},
            "universalPad": UNIVERSAL_PAD,
            "pads": {f"value{i}": 0 for i in range(pad_count)},
            "UnusedPads": {"value0": 1},
        }
    }
    return json.dumps(pads, indent=4)


class XPMWriter:
    """
    Writer for MPC XPM program files.

    Example:
        XPMWriter.write(program, "out/Piano/Piano.xpm")
    """

    @classmethod
    def write(cls, program: Program, filepath: Union[str, Path]) -> Path:
        """
        Write a program to disk.

        Args:
            program: Program to serialize
            filepath: Output .xpm path

        Returns:
            Path written
        """
        filepath = Path(filepath)
        xml_text = cls.to_xml(program)
        with open(filepath, "w", encoding="utf-8") as f:
            f.write(xml_text)
        logger.debug("Wrote %s (%d instruments)", filepath, len(program.instruments))
        return filepath

    @classmethod
    def to_xml(cls, program: Program) -> str:
        """Serialize a program to an XML string."""
        root = cls.build_tree(program)
        ET.indent(root, space="  ")
        return XML_DECLARATION + ET.tostring(root, encoding="unicode") + "\n"

    @classmethod
    def build_tree(cls, program: Program) -> ET.Element:
        root = ET.Element(tags.ROOT)

        version = ET.SubElement(root, tags.VERSION)
        cls._add_fields(version, program.version, tags.VERSION_TAGS)

        element = ET.SubElement(root, tags.PROGRAM, {tags.TYPE_ATTRIBUTE: program.program_type.value})
        ET.SubElement(element, tags.PROGRAM_NAME).text = program.name
        ET.SubElement(element, tags.PROGRAM_PADS).text = program_pads_json()
        cls._add_fields(element, program, tags.PROGRAM_HEAD_TAGS)

        instruments = ET.SubElement(element, tags.INSTRUMENTS)
        for instrument in program.instruments:
            cls._add_instrument(instruments, instrument)

        if program.pad_note_map is not None:
            note_map = ET.SubElement(element, tags.PAD_NOTE_MAP)
            for pad in program.pad_note_map:
                pad_element = ET.SubElement(note_map, tags.PAD_NOTE, {tags.NUMBER_ATTRIBUTE: str(pad.number)})
                ET.SubElement(pad_element, "Note").text = str(pad.note)

        if program.pad_group_map is not None:
            group_map = ET.SubElement(element, tags.PAD_GROUP_MAP)
            for pad_group in program.pad_group_map:
                group_element = ET.SubElement(
                    group_map, tags.PAD_GROUP, {tags.NUMBER_ATTRIBUTE: str(pad_group.number)}
                )
                ET.SubElement(group_element, "Group").text = str(pad_group.group)

        cls._add_fields(element, program, tags.PROGRAM_TAIL_TAGS)
        ET.SubElement(element, "QLinkAssignments")
        return root

    @classmethod
    def _add_fields(cls, parent: ET.Element, source: Any, table: tags.TagTable) -> None:
        for tag, attribute in table:
            value = getattr(source, attribute)
            if isinstance(value, AudioRoute):
                cls._add_fields(ET.SubElement(parent, tag), value, tags.AUDIO_ROUTE_TAGS)
            elif isinstance(value, LFO):
                cls._add_fields(ET.SubElement(parent, tag), value, tags.LFO_TAGS)
            else:
                ET.SubElement(parent, tag).text = format_value(value)

    @classmethod
    def _add_instrument(cls, parent: ET.Element, instrument: Instrument) -> None:
        element = ET.SubElement(parent, tags.INSTRUMENT, {tags.NUMBER_ATTRIBUTE: str(instrument.number)})
        cls._add_fields(element, instrument, tags.INSTRUMENT_TAGS)
        layers = ET.SubElement(element, tags.LAYERS)
        for layer in instrument.layers:
            cls._add_layer(layers, layer)

    @classmethod
    def _add_layer(cls, parent: ET.Element, layer: Layer) -> None:
        element = ET.SubElement(parent, tags.LAYER, {tags.NUMBER_ATTRIBUTE: str(layer.number)})
        cls._add_fields(element, layer, tags.LAYER_TAGS)
