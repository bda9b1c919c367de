"""
Sectioned logic file parser for sketchlogic.

A decrypted logic file is a sequence of sections, each introduced by an
``@<screen>.java_<container>`` header line. Block containers (events and
moreblock bodies) hold one JSON block record per line; the other sections
(variables, lists, moreblock definitions, components, events) are kept as
plain lines so the file can be written back unchanged.
"""

import logging
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, Field, ValidationError

from ..errors import LogicFormatError, RecordFormatError
from ..models import RawBlockRecord, Spec

HEADER_PREFIX = "@"
JAVA_SEPARATOR = ".java_"

# Container names that hold metadata rather than blocks
METADATA_SECTIONS = {"var", "list", "func", "components", "events"}


class ContainerHeader(BaseModel):
    """
    The key of a section, e.g. ``MainActivity.java_onCreate_initializeLogic``.
    """

    screen: str = Field(..., description="The java file name without extension")
    container: str = Field(..., description="The event, moreblock or metadata name")

    @classmethod
    def parse(cls, text: str, line: Optional[int] = None) -> "ContainerHeader":
        screen, separator, container = text.partition(JAVA_SEPARATOR)
        if not separator or not screen or not container:
            raise LogicFormatError(
                f"Malformed section header {text!r}, expected <screen>.java_<container>",
                line=line,
            )
        return cls(screen=screen, container=container)

    @property
    def is_block_container(self) -> bool:
        return self.container not in METADATA_SECTIONS

    def __str__(self) -> str:
        return f"{self.screen}{JAVA_SEPARATOR}{self.container}"


class Section(BaseModel):
    """A header and the non-empty lines below it."""

    header: ContainerHeader
    lines: List[str] = Field(default_factory=list)
    line: Optional[int] = Field(default=None, description="Line number of the header, 1-based")


class MoreBlockDefinition(BaseModel):
    """
    A moreblock declaration from a ``func`` section, written as ``name:spec``.
    """

    name: str
    spec: Spec

    @classmethod
    def parse(cls, text: str) -> "MoreBlockDefinition":
        name, separator, spec = text.partition(":")
        if not separator:
            raise LogicFormatError(f"Malformed moreblock definition {text!r}")
        return cls(name=name, spec=Spec.parse(spec))

    def to_line(self) -> str:
        return f"{self.name}:{self.spec.reconstruct()}"


def parse_sections(text: str) -> List[Section]:
    """
    Split logic text into sections.

    Raises:
        LogicFormatError: If content appears before the first header or a header is malformed
    """
    sections: List[Section] = []
    current: Optional[Section] = None

    for number, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        if line.startswith(HEADER_PREFIX):
            current = Section(header=ContainerHeader.parse(line[1:].strip(), number), line=number)
            sections.append(current)
        elif current is None:
            raise LogicFormatError("Content before the first section header", line=number)
        else:
            current.lines.append(line)

    return sections


def parse_block_records(lines: List[str], header: Optional[str] = None, first_line: Optional[int] = None) -> List[RawBlockRecord]:
    """
    Decode one JSON block record per line.

    Raises:
        RecordFormatError: If a line is not a valid block record
    """
    records = []
    for offset, line in enumerate(lines):
        try:
            records.append(RawBlockRecord.from_json_line(line))
        except ValidationError as e:
            line_number = first_line + offset + 1 if first_line is not None else offset + 1
            raise RecordFormatError(
                f"Invalid block record: {e.errors()[0]['msg']}",
                line=line_number,
                header=header,
            ) from e
    return records


class LogicFile(BaseModel):
    """
    A parsed logic file that keeps section order for lossless writing.
    """

    sections: List[Section] = Field(default_factory=list)

    @classmethod
    def parse(cls, text: str) -> "LogicFile":
        logic = cls(sections=parse_sections(text))
        logging.info(
            f"Parsed logic file with {len(logic.sections)} sections "
            f"({len(logic.containers())} block containers)"
        )
        return logic

    def dumps(self) -> str:
        """Write the file back in the editor's layout."""
        chunks = [
            "\n".join([f"{HEADER_PREFIX}{section.header}", *section.lines])
            for section in self.sections
        ]
        return "\n\n".join(chunks) + "\n" if chunks else ""

    def screens(self) -> List[str]:
        seen: Dict[str, None] = {}
        for section in self.sections:
            seen.setdefault(section.header.screen)
        return list(seen)

    def find(self, header: Union[str, ContainerHeader]) -> Optional[Section]:
        key = str(header)
        for section in self.sections:
            if str(section.header) == key:
                return section
        return None

    def containers(self) -> List[ContainerHeader]:
        """Headers of all block containers, in file order."""
        return [section.header for section in self.sections if section.header.is_block_container]

    def records(self, header: Union[str, ContainerHeader]) -> List[RawBlockRecord]:
        """
        Decode the block records of one container.

        Raises:
            KeyError: If there is no such section
            RecordFormatError: If a record line is invalid
        """
        section = self.find(header)
        if section is None:
            raise KeyError(str(header))
        return parse_block_records(section.lines, str(section.header), section.line)

    def set_records(self, header: Union[str, ContainerHeader], records: List[RawBlockRecord]) -> None:
        """Replace (or add) the records of a block container."""
        if not isinstance(header, ContainerHeader):
            header = ContainerHeader.parse(header)
        lines = [record.to_json_line() for record in records]

        section = self.find(header)
        if section is None:
            self.sections.append(Section(header=header, lines=lines))
        else:
            section.lines = lines

    def more_blocks(self, screen: str) -> List[MoreBlockDefinition]:
        """Moreblock definitions declared for ``screen``."""
        section = self.find(ContainerHeader(screen=screen, container="func"))
        if section is None:
            return []
        return [MoreBlockDefinition.parse(line) for line in section.lines]
