import functools

import numpy as np
import pandas as pd
from tabulate import tabulate

from discretebn.factors import Factor
from discretebn.model import BayesianNetwork, BayesianNode


def factor_to_df(factor: Factor, value_col="Value") -> pd.DataFrame:
    """
    Return a pandas DataFrame with one row per entry of the factor:
    a column with the token of each variable, followed by the weight.
    """
    table = []
    for key, weight in factor.entries():
        table.append([v.token(i) for v, i in zip(factor.variables, key)] + [weight])
    return pd.DataFrame(table, columns=list(factor.scope) + [value_col])


def distribution_to_df(node: BayesianNode, distribution, prob_col="P") -> pd.DataFrame:
    """Pair each value of the node with its probability"""
    distribution = np.asarray(distribution, dtype=float).reshape(-1)
    assert len(distribution) == len(node.domain), "The distribution does not match the node's domain"
    return pd.DataFrame({node.name: list(node.domain), prob_col: distribution})


def display_distribution(node: BayesianNode, distribution, tablefmt='simple') -> str:
    """Return a tabulate-formatted string of a distribution over the node's values"""
    rows = [[token, p] for token, p in zip(node.domain, np.asarray(distribution, dtype=float).reshape(-1))]
    return tabulate(rows, headers=[node.name, 'P'], tablefmt=tablefmt)


def network_to_factor(network: BayesianNetwork) -> Factor:
    """Compute the product of all CPTs in the network returning one large Factor (the joint)"""
    return functools.reduce(lambda a, b: a.product(b), network.iterfactors())


def brute_force_query(network: BayesianNetwork, query: str, evidence=()) -> np.ndarray:
    """
    Return P(query | evidence) by building the complete joint before conditioning
    on the evidence and marginalising everything else.

    This is exponential in the number of nodes, it is meant as a reference for small networks.
    evidence: an iterable of Propositions
    """
    joint = network_to_factor(network).make_factor(evidence)
    for name in list(joint.scope):
        if name != query:
            joint = joint.sum_out(name)
    if query not in joint:  # the query was observed
        node = network.find_node(query)
        point_mass = np.zeros(len(node.domain))
        point_mass[[p.value_index for p in evidence if p.name == query][0]] = 1.0
        return point_mass
    return joint.normalize().values


def tvd(p, q):
    """
    The total variation distance (TVD) between two discrete distributions P and Q over the same rvs X is defined as
        1/2 \\sum_{x\\in Val(X)} |P(X=x) - Q(X=x)|

    p and q can be
    - two np.ndarray objects (or sequences)
    - two normalised Factor objects (possibly with their variables in different orders)
    """
    if isinstance(p, Factor) and isinstance(q, Factor):
        perm = [q.scope.index(rv) for rv in p.scope]
        return 0.5 * float(np.abs(p.values - q.values.transpose(perm)).sum())
    elif not isinstance(p, Factor) and not isinstance(q, Factor):
        return 0.5 * float(np.abs(np.asarray(p, dtype=float) - np.asarray(q, dtype=float)).sum())
    else:
        raise NotImplementedError("I need np.ndarray objects, or Factor objects")
