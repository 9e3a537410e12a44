import math
import numbers

from discretebn import config
from discretebn.errors import ConfigurationError
from discretebn.factors import TabularCPD
from discretebn.variables import Proposition, RandomVariable


class BayesianNode:
    """
    A node of a Bayesian network: one random variable and its CPT given the parents.

    Nodes refer to their parents and children by name only, the network that
    registers them is what resolves a name to a node.
    """

    def __init__(self, name: str, domain, values, parents=(), tol=config.CPT_TOLERANCE):
        """
        name: name of the node (and of its variable)
        domain: the values the node can take, in order
        values: the probabilities of those values given all possible parent values,
            flattened in row-major order over (parent1, parent2, ..., this node)
        parents: the parent nodes, in the order used by `values`
        tol: tolerance when checking that every row of the CPT adds to 1.0
        """
        self.var = RandomVariable(name, domain)
        parents = tuple(parents)
        for p in parents:
            if not isinstance(p, BayesianNode):
                raise ConfigurationError(f"The parents of '{name}' must be BayesianNode objects, got {p!r}")

        expected = math.prod(len(p.var) for p in parents) * len(self.var)
        if len(values) != expected:
            raise ConfigurationError(
                f"The expected number of values for node '{name}' is {expected}. "
                f"The actual number of values given is {len(values)}"
            )
        self.cpt = TabularCPD([p.var for p in parents], self.var, values, tol=tol)
        self.parents = tuple(p.name for p in parents)
        self._children = []
        for p in parents:
            p._add_child(self.name)

    def _add_child(self, name: str):
        if name not in self._children:
            self._children.append(name)

    @property
    def name(self) -> str:
        return self.var.name

    @property
    def domain(self) -> tuple:
        return self.var.domain

    @property
    def children(self) -> tuple:
        """Names of the nodes that were built with this node as a parent"""
        return tuple(self._children)

    def instantiate(self, value) -> Proposition:
        """
        Assign a value to this node's variable, e.g. fight=true.

        value: either a token of the domain, or its index (any integral number, numpy ints included)
        """
        if isinstance(value, numbers.Integral) and not isinstance(value, bool):
            index = int(value)
            if index < 0:
                raise ConfigurationError("Index cannot be negative.")
            if index >= len(self.var):
                raise ConfigurationError(
                    f"The index {index} is invalid because '{self.name}' only has {len(self.var)} values."
                )
        else:
            index = self.var.index(str(value))
        return Proposition(self.name, self.var.domain[index], index)

    def distribution(self, evidence=()):
        """The CPT entries matching the evidence (all of them if there is none), normalized"""
        return self.cpt.distribution(evidence)

    def make_factor(self, evidence=()):
        """The CPT conditioned on the evidence (observed variables are removed)"""
        return self.cpt.make_factor(evidence)

    def __repr__(self):
        return f"BayesianNode({self.name!r}, parents={list(self.parents)})"

    def __str__(self):
        return f"{self.name}\n{self.cpt.display()}"
