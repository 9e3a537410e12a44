from .sampling import pick_one
from .elimination import VariableElimination, parse_evidence, split_factors

__all__ = [
    "pick_one",
    "VariableElimination",
    "parse_evidence",
    "split_factors",
]
