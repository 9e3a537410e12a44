from .graph import DAG, topological_sort, depth_first_order, compute_ancestors, mark_relevant
from .node import BayesianNode
from .network import BayesianNetwork

__all__ = [
    "DAG",
    "topological_sort",
    "depth_first_order",
    "compute_ancestors",
    "mark_relevant",
    "BayesianNode",
    "BayesianNetwork",
]
