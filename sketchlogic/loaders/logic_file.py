"""
Loaders for logic files on disk and logic text in memory.
"""

import logging
from pathlib import Path
from typing import Optional

from .. import envelope
from ..codec import BlockGraphCodec
from ..errors import EnvelopeError
from ..parser import LogicFile
from .base import BaseLoader


class LogicFileLoader(BaseLoader):
    """
    Loads the ``logic`` file of a project, encrypted or already decrypted.
    """

    def __init__(self, path: str, encrypted: bool = True, codec: Optional[BlockGraphCodec] = None):
        """
        Initialize the loader.

        Args:
            path: Path to the logic file
            encrypted: Whether the file is wrapped in the encryption envelope
            codec: Codec to decode containers with
        """
        super().__init__(codec)
        self.path = Path(path)
        self.encrypted = encrypted

        if not self.path.is_file():
            logging.warning(f"Logic file not found: {self.path}")

        logging.info(f"Initialized logic file loader for: {self.path}")

    def load_logic(self) -> LogicFile:
        if self.encrypted:
            data = envelope.decrypt_file(self.path)
        else:
            try:
                data = self.path.read_bytes()
            except OSError as e:
                raise EnvelopeError(f"Failed to read {self.path}: {e}") from e

        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise EnvelopeError(f"{self.path} is not valid UTF-8 text") from e

        return LogicFile.parse(text)

    def save_logic(self, logic: LogicFile) -> None:
        data = logic.dumps().encode("utf-8")
        if self.encrypted:
            envelope.encrypt_file(self.path, data)
        else:
            self.path.write_bytes(data)
            logging.info(f"Wrote {self.path} ({len(data)} bytes)")


class TextLoader(BaseLoader):
    """
    Loads logic text held in memory; saving replaces the held text.
    """

    def __init__(self, text: str, codec: Optional[BlockGraphCodec] = None):
        super().__init__(codec)
        self.text = text

    def load_logic(self) -> LogicFile:
        return LogicFile.parse(self.text)

    def save_logic(self, logic: LogicFile) -> None:
        self.text = logic.dumps()
