from .factor import WILDCARD, Factor, normalize_distribution
from .cpd import TabularCPD

__all__ = [
    "WILDCARD",
    "Factor",
    "normalize_distribution",
    "TabularCPD",
]
