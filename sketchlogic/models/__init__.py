"""Data models for sketchlogic."""

from .color import Color
from .spec import BoundSpec, FieldItem, Spec, SpecFieldType, SpecItem, TextItem
from .block import Block, Blocks, RawBlockRecord

__all__ = [
    "Color",
    "BoundSpec",
    "FieldItem",
    "Spec",
    "SpecFieldType",
    "SpecItem",
    "TextItem",
    "Block",
    "Blocks",
    "RawBlockRecord"
]
