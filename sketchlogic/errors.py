"""
Error types raised by sketchlogic.

Every error carries enough context (block id, container header, line number)
to locate the record that caused it.
"""

from typing import Optional


class SketchLogicError(Exception):
    """Base class for all sketchlogic errors."""


class StructuralError(SketchLogicError):
    """
    The pointer structure of a flat block list is broken.

    Raised for dangling next/substack pointers, duplicate ids, cycles and
    nesting that exceeds the configured depth.
    """

    def __init__(self, message: str, block_id: Optional[int] = None, container: Optional[str] = None):
        self.message = message
        self.block_id = block_id
        self.container = container
        super().__init__(self._describe())

    def _describe(self) -> str:
        location = []
        if self.container is not None:
            location.append(f"container {self.container}")
        if self.block_id is not None:
            location.append(f"block {self.block_id}")
        if not location:
            return self.message
        return f"{self.message} ({', '.join(location)})"


class CycleError(StructuralError):
    """A block was reached twice while walking next/substack pointers."""


class NestingDepthError(StructuralError):
    """Substack or argument nesting went past the configured maximum depth."""


class SpecError(SketchLogicError):
    """Base class for spec template errors."""


class SpecParseError(SpecError):
    """A spec template contains a field with an unknown type character."""

    def __init__(self, token: str, spec: str):
        self.token = token
        self.spec = spec
        super().__init__(
            f'Unknown spec field "{token}" in "{spec}", expected %s, %b, %d or %m'
        )


class SpecArityError(SpecError):
    """The number of arguments does not match the number of fields of a spec."""

    def __init__(self, expected: int, actual: int, spec: str):
        self.expected = expected
        self.actual = actual
        self.spec = spec
        super().__init__(
            f'Spec "{spec}" takes {expected} argument(s) but {actual} were given'
        )


class BlockSpecError(SpecError):
    """A spec error raised while decoding a specific block."""

    def __init__(self, cause: SpecError, block_id: int, container: Optional[str] = None):
        self.cause = cause
        self.block_id = block_id
        self.container = container
        where = f"block {block_id}"
        if container is not None:
            where = f"container {container}, {where}"
        super().__init__(f"{cause} ({where})")


class UnrecognizedColorError(SketchLogicError):
    """A block color does not belong to any known category."""

    def __init__(self, color):
        self.color = color
        super().__init__(f"Unrecognized block color {color}")


class EnvelopeError(SketchLogicError):
    """Encrypting, decrypting or reading a project file failed."""


class LogicFormatError(SketchLogicError):
    """The sectioned logic text is malformed."""

    def __init__(self, message: str, line: Optional[int] = None, header: Optional[str] = None):
        self.message = message
        self.line = line
        self.header = header
        location = []
        if header is not None:
            location.append(f"section @{header}")
        if line is not None:
            location.append(f"line {line}")
        if location:
            message = f"{message} ({', '.join(location)})"
        super().__init__(message)


class RecordFormatError(LogicFormatError):
    """A block record line could not be decoded."""
