from .base import BayesianParser
from .json_parser import BayesianJsonParser
from .genie import BayesianGenieParser

__all__ = [
    "BayesianParser",
    "BayesianJsonParser",
    "BayesianGenieParser",
]
