import numpy as np
from tabulate import tabulate

from discretebn import config
from discretebn.errors import ConfigurationError
from discretebn.factors.factor import Factor


class TabularCPD(Factor):
    """
    A conditional probability table P(child | parents) implemented as a Factor.

    The child is always the last variable, so for any joint assignment of the parents
    the last axis of the table holds a distribution over the child's domain.
    The order of the parents has no meaning for the CPD, but it does tell
    the implementation which axis belongs to which parent.
    """

    def __init__(self, parents, child, values, tol=config.CPT_TOLERANCE):
        """
        parents: sequence of parent RandomVariables
        child: the child RandomVariable
        values: probabilities in row-major order over (parent1, parent2, ..., child)
        tol: a tolerance parameter when checking whether distributions add to 1.0
        """
        super().__init__(tuple(parents) + (child,), values)
        self.parents = tuple(parents)
        self.child = child
        sums = np.sum(self.values, -1)
        if not np.allclose(sums, 1.0, rtol=0.0, atol=tol):
            worst = float(np.max(np.abs(sums - 1.0)))
            raise ConfigurationError(
                f"Some rows of the CPT of '{child.name}' are not summing to 1.0 (largest deviation {worst:g})"
            )

    def display(self, tablefmt="simple", factor_name=None):
        """One row per joint assignment of the parents, one column per value of the child"""
        data = []
        headers = [p.name for p in self.parents] + [f"{self.child.name}={token}" for token in self.child]
        rows = self.values.reshape(-1, len(self.child))
        contexts = Factor(self.parents, np.ones(rows.shape[0])).keys()
        for ctxt, row in zip(contexts, rows):
            data.append([p.token(i) for p, i in zip(self.parents, ctxt)] + row.tolist())
        return tabulate(data, headers=headers, tablefmt=tablefmt)
