__version__ = "0.1.0"
__license__ = "MIT"

from .errors import BayesNetError, ConfigurationError, NotFoundError, InferenceError
from .variables import RandomVariable, Proposition
from .factors import Factor, TabularCPD
from .model import BayesianNode, BayesianNetwork
from .inference import VariableElimination, pick_one
from .parsers import BayesianJsonParser, BayesianGenieParser

__all__ = [
    "BayesNetError",
    "ConfigurationError",
    "NotFoundError",
    "InferenceError",
    "RandomVariable",
    "Proposition",
    "Factor",
    "TabularCPD",
    "BayesianNode",
    "BayesianNetwork",
    "VariableElimination",
    "pick_one",
    "BayesianJsonParser",
    "BayesianGenieParser",
]
