import itertools
import math
from collections import OrderedDict

import numpy as np
from tabulate import tabulate

from discretebn import config
from discretebn.errors import ConfigurationError, InferenceError, NotFoundError
from discretebn.variables import RandomVariable

# marks an unassigned position in a composite key (only ever used for matching, never stored)
WILDCARD = None


def normalize_distribution(values, tol=config.NORMALIZATION_TOLERANCE):
    """
    Return the weights as a 1-d array that sums to 1.0.

    If the weights already add up to 1.0 within tol they are returned untouched,
     so that tables which are normalized already don't pick up rounding noise.
    """
    values = np.asarray(values, dtype=float).reshape(-1)
    Z = values.sum()
    if abs(1.0 - Z) < tol:
        return values
    if not Z > 0:
        raise InferenceError(f"I need a positive total weight to normalize, got Z={Z}")
    return values / Z


class Factor:
    """
    A factor over an ordered set of discrete rvs, represented as a dense numpy array.

    The axes of the array follow the order of `variables`, and the i-th axis has
    as many positions as the i-th variable has tokens. Flattening the array in row-major
    order (later variables vary fastest) gives the mixed-radix layout of the table, and the
    composite key of an entry is its multi-index: one token index per variable.

    Factors are never modified in place, every operation returns a new factor.
    """

    def __init__(self, variables, values):
        """
        variables: sequence of RandomVariable objects, no repetitions
        values: the weights, either already shaped like the table
            or flat in row-major order; they must be non-negative
        """
        variables = tuple(variables)
        for v in variables:
            if not isinstance(v, RandomVariable):
                raise ConfigurationError(f"Factors are defined over RandomVariable objects, got {v!r}")
        if len({v.name for v in variables}) != len(variables):
            raise ConfigurationError("No repetitions allowed in the variables of a factor")

        shape = tuple(len(v) for v in variables)
        try:
            values = np.array(values, dtype=float)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Factor weights must be numbers: {e}") from e
        if values.size != math.prod(shape):
            raise ConfigurationError(
                f"A factor over {[v.name for v in variables]} needs {math.prod(shape)} values, got {values.size}"
            )
        if np.any(values < 0):
            raise ConfigurationError("Factor weights must be non-negative")

        self.variables = variables
        self.var2axis = OrderedDict((v.name, axis) for axis, v in enumerate(variables))
        self.values = values.reshape(shape)

    @property
    def scope(self) -> tuple:
        """Names of the variables, in axis order"""
        return tuple(self.var2axis.keys())

    def contains_var(self, var) -> bool:
        """Test membership of an rv (a RandomVariable or its name)"""
        name = var.name if isinstance(var, RandomVariable) else var
        return name in self.var2axis

    def __contains__(self, var):
        return self.contains_var(var)

    def __iter__(self):
        return iter(self.variables)

    def __len__(self):
        """The number of entries in the table"""
        return self.values.size

    def __getitem__(self, key):
        """Return the weight of a complete composite key"""
        key = tuple(key)
        if len(key) != len(self.variables) or WILDCARD in key:
            raise ConfigurationError(f"I need a complete key of length {len(self.variables)}, got {key}")
        return float(self.values[key])

    def keys(self):
        """Iterate over composite keys in row-major order"""
        return itertools.product(*(range(len(v)) for v in self.variables))

    def entries(self):
        """Iterate over (composite key, weight) pairs in row-major order"""
        return zip(self.keys(), self.values.reshape(-1).tolist())

    def relevant_evidence(self, evidence) -> dict:
        """
        Keep only the propositions about variables in this factor, as a dict name -> value index.
        Evidence about other variables is not an error, it is simply irrelevant here.
        """
        relevant = dict()
        for prop in evidence:
            if prop.name not in self.var2axis:
                continue
            var = self.variables[self.var2axis[prop.name]]
            if not 0 <= prop.value_index < len(var):
                raise ConfigurationError(f"Evidence {prop} has index {prop.value_index} outside the domain of '{var.name}'")
            if relevant.get(prop.name, prop.value_index) != prop.value_index:
                raise ConfigurationError(f"Conflicting evidence for '{prop.name}'")
            relevant[prop.name] = prop.value_index
        return relevant

    def make_key(self, evidence) -> tuple:
        """
        Return a partial-match key: the value index where the evidence assigns the variable,
        and WILDCARD everywhere else.
        """
        assigned = self.relevant_evidence(evidence)
        return tuple(assigned.get(name, WILDCARD) for name in self.scope)

    @staticmethod
    def make_slicer(key) -> tuple:
        """Turn a composite key into a tuple that slices the table"""
        return tuple(slice(None) if k is WILDCARD else k for k in key)

    def match(self, key):
        """
        Iterate over the (key, weight) entries matching a partial key, in row-major order.
        A WILDCARD matches anything, other positions must be equal.
        """
        key = tuple(key)
        if len(key) != len(self.variables):
            raise ConfigurationError(f"This factor has keys of length {len(self.variables)}, got {key}")
        free = [i for i, k in enumerate(key) if k is WILDCARD]
        weights = self.values[self.make_slicer(key)].reshape(-1).tolist()
        for outcome, weight in zip(itertools.product(*(range(len(self.variables[i])) for i in free)), weights):
            full = list(key)
            for i, idx in zip(free, outcome):
                full[i] = idx
            yield tuple(full), weight

    def distribution(self, evidence=(), tol=config.NORMALIZATION_TOLERANCE) -> np.ndarray:
        """
        Return the weights of the entries matching the evidence (row-major order), normalized.

        evidence: an iterable of Propositions, those about rvs outside this factor are ignored
        """
        key = self.make_key(evidence)
        return normalize_distribution(self.values[self.make_slicer(key)], tol)

    def make_factor(self, evidence=()) -> 'Factor':
        """
        Condition on the evidence, returning a new Factor without the observed variables.
        The weights are the matching entries, they are not renormalized.
        """
        key = self.make_key(evidence)
        if all(k is WILDCARD for k in key):
            return self
        remaining = [v for v, k in zip(self.variables, key) if k is WILDCARD]
        return Factor(remaining, self.values[self.make_slicer(key)])

    def didactic_product(self, other: 'Factor') -> 'Factor':
        """
        Pointwise product by explicit enumeration of the joint keys of the result.
        It is slow for large scopes, but it has no limit on the number of variables.
        """
        new_vars = list(OrderedDict((v.name, v) for v in self.variables + other.variables).values())
        shape = [len(v) for v in new_vars]
        new_values = np.zeros(shape)
        for key in itertools.product(*(range(n) for n in shape)):
            k = dict(zip((v.name for v in new_vars), key))
            val1 = self.values[tuple(k[name] for name in self.scope)]
            val2 = other.values[tuple(k[name] for name in other.scope)]
            new_values[key] = val1 * val2
        return Factor(new_vars, new_values)

    def product(self, other: 'Factor') -> 'Factor':
        """
        Return the pointwise product (relational join) of two factors.

        The result is over this factor's variables, in order, followed by those
        of the other factor that are not shared. Every entry of the result is the
        product of the two entries that agree with it on the shared variables.

        Example:
            φ1(A, B) × φ2(B, C)  →  φ3(A, B, C)
            Einsum pattern: 'ab,bc->abc'
        """
        new_vars = list(OrderedDict((v.name, v) for v in self.variables + other.variables).values())
        # einsum cannot deal with too many axes
        if len(new_vars) > 26:
            return self.didactic_product(other)

        var_to_letter = {v.name: chr(97 + i) for i, v in enumerate(new_vars)}
        idx_self = ''.join(var_to_letter[name] for name in self.scope)
        idx_other = ''.join(var_to_letter[name] for name in other.scope)
        idx_out = ''.join(var_to_letter[v.name] for v in new_vars)
        # every index appears in the output, so nothing is summed
        new_values = np.einsum(f"{idx_self},{idx_other}->{idx_out}", self.values, other.values)
        return Factor(new_vars, new_values)

    pointwise_product = product

    def sum_out(self, var) -> 'Factor':
        """
        Marginalize one rv out of the factor, returning a new Factor over the remaining rvs
        (in their original order).

        Example:
            φ(A, B, C)  --sum out B-->  φ'(A, C) = \\sum_b φ(A, B=b, C)
        """
        name = var.name if isinstance(var, RandomVariable) else var
        if name not in self.var2axis:
            raise NotFoundError(f"Cannot sum out '{name}', it is not in the factor's scope {self.scope}")
        new_values = np.sum(self.values, axis=self.var2axis[name])
        return Factor([v for v in self.variables if v.name != name], new_values)

    def normalize(self) -> 'Factor':
        """Return a globally normalized copy of the factor"""
        Z = np.sum(self.values)
        if Z > 0:
            return Factor(self.variables, self.values / Z)
        raise InferenceError(f"I need Z > 0, got Z={Z}")

    def to_assignment_map(self) -> dict:
        """
        Return {frozenset of (name, value index) pairs: weight}.
        This view doesn't depend on the order in which the variables are stored.
        """
        return {
            frozenset(zip(self.scope, key)): weight
            for key, weight in self.entries()
        }

    def display(self, tablefmt="simple", factor_name="Value"):
        """Render the Factor as a string for visualisation using tabulate"""
        data = []
        for key, weight in self.entries():
            data.append([v.token(i) for v, i in zip(self.variables, key)] + [weight])
        return tabulate(data, headers=list(self.scope) + [factor_name], tablefmt=tablefmt)

    def __str__(self):
        return self.display()

    def __repr__(self):
        return f"Factor({list(self.scope)}, shape={self.values.shape})"
