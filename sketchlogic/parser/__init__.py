"""Parsers for the sectioned text inside project files."""

from .logic import (
    ContainerHeader,
    LogicFile,
    MoreBlockDefinition,
    Section,
    parse_block_records,
    parse_sections,
)

__all__ = [
    "ContainerHeader",
    "LogicFile",
    "MoreBlockDefinition",
    "Section",
    "parse_block_records",
    "parse_sections"
]
