import logging
from pathlib import Path

from discretebn.model import BayesianNetwork

logger = logging.getLogger(__name__)


class BayesianParser:
    """
    Builds a BayesianNetwork from a text description.
    Subclasses implement parse, parse_file reads a file and hands its contents to parse.
    """

    def parse(self, text: str) -> BayesianNetwork:
        """Parse a string and return the network it describes"""
        raise NotImplementedError("To be implemented by specific type of parser")

    def parse_file(self, path) -> BayesianNetwork:
        """Read and parse a file"""
        path = Path(path)
        logger.info("Loading network from %s", path)
        return self.parse(path.read_text(encoding="utf-8"))
