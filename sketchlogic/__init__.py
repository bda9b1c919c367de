"""
sketchlogic: A codec for the block logic of visual programming projects.

Decodes the flat block records of a project's logic file into nested block
chains and encodes them back without loss.
"""

__version__ = "0.1.0"
__author__ = "sketchlogic Project"

# Import main components
from .category import BlockCategory, categorize
from .codec import BlockGraphCodec, decode, encode
from .errors import (
    BlockSpecError,
    CycleError,
    EnvelopeError,
    LogicFormatError,
    NestingDepthError,
    RecordFormatError,
    SketchLogicError,
    SpecArityError,
    SpecError,
    SpecParseError,
    StructuralError,
    UnrecognizedColorError,
)
from .loaders import BaseLoader, LoadReport, LogicFileLoader, TextLoader
from .models import Block, Blocks, BoundSpec, Color, FieldItem, RawBlockRecord, Spec, SpecFieldType, TextItem
from .parser import ContainerHeader, LogicFile, MoreBlockDefinition

__all__ = [
    "BlockCategory",
    "categorize",
    "BlockGraphCodec",
    "decode",
    "encode",
    "BlockSpecError",
    "CycleError",
    "EnvelopeError",
    "LogicFormatError",
    "NestingDepthError",
    "RecordFormatError",
    "SketchLogicError",
    "SpecArityError",
    "SpecError",
    "SpecParseError",
    "StructuralError",
    "UnrecognizedColorError",
    "BaseLoader",
    "LoadReport",
    "LogicFileLoader",
    "TextLoader",
    "Block",
    "Blocks",
    "BoundSpec",
    "Color",
    "FieldItem",
    "RawBlockRecord",
    "Spec",
    "SpecFieldType",
    "TextItem",
    "ContainerHeader",
    "LogicFile",
    "MoreBlockDefinition"
]
