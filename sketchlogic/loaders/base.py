"""
Base loader interface for sketchlogic.

A loader fetches the logic text of a project from somewhere and turns every
block container in it into a Blocks chain.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional

from pydantic import BaseModel, Field

from ..codec import BlockGraphCodec
from ..errors import SketchLogicError
from ..models import Blocks
from ..parser import LogicFile


class LoadReport(BaseModel):
    """
    The outcome of decoding every container of a logic file.

    Containers are decoded independently, so a corrupt container only shows up
    in ``failures``.
    """

    decoded: Dict[str, Blocks] = Field(
        default_factory=dict,
        description="Decoded chains keyed by container header"
    )
    failures: Dict[str, str] = Field(
        default_factory=dict,
        description="Error messages keyed by container header"
    )

    @property
    def ok(self) -> bool:
        return not self.failures


class BaseLoader(ABC):
    """
    Abstract base class for all logic loaders.
    """

    def __init__(self, codec: Optional[BlockGraphCodec] = None):
        self.codec = codec or BlockGraphCodec()

    @abstractmethod
    def load_logic(self) -> LogicFile:
        """
        Retrieve and parse the logic text.

        Returns:
            The parsed LogicFile
        """
        pass

    @abstractmethod
    def save_logic(self, logic: LogicFile) -> None:
        """
        Persist a LogicFile.

        Args:
            logic: The file to write
        """
        pass

    def load_containers(self) -> LoadReport:
        """
        Decode every block container of the logic file.

        Returns:
            A LoadReport with the decoded chains and the failed containers
        """
        logic = self.load_logic()
        report = LoadReport()

        for header in logic.containers():
            key = str(header)
            try:
                report.decoded[key] = self.codec.decode(logic.records(header), key)
            except SketchLogicError as e:
                logging.error(f"Failed to decode container {key}: {e}")
                report.failures[key] = str(e)

        logging.info(
            f"Decoded {len(report.decoded)} container(s), {len(report.failures)} failed"
        )
        return report

    def save_containers(self, containers: Dict[str, Blocks], renumber: Optional[bool] = None) -> LogicFile:
        """
        Encode ``containers`` back into the logic file and persist it.

        Sections that are not in ``containers`` are written back untouched.

        Returns:
            The LogicFile that was written
        """
        logic = self.load_logic()
        for header, blocks in containers.items():
            logic.set_records(header, self.codec.encode(blocks, renumber))
        self.save_logic(logic)
        logging.info(f"Saved {len(containers)} container(s)")
        return logic
