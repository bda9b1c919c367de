"""Loaders that read logic files and decode their block containers."""

from .base import BaseLoader, LoadReport
from .logic_file import LogicFileLoader, TextLoader

__all__ = ["BaseLoader", "LoadReport", "LogicFileLoader", "TextLoader"]
