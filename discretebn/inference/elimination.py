import functools
import logging

import numpy as np

from discretebn import config
from discretebn.errors import BayesNetError, ConfigurationError, InferenceError
from discretebn.factors import normalize_distribution
from discretebn.inference.sampling import pick_one
from discretebn.model import BayesianNetwork, BayesianNode
from discretebn.variables import Proposition

logger = logging.getLogger(__name__)


def parse_evidence(observations) -> list:
    """
    Split observation strings of the form "name=value" into (name, value) pairs.
    Whitespace around the name and the value is ignored.
    """
    pairs = []
    for o in observations:
        if not isinstance(o, str):
            raise ConfigurationError(f"Expected an observation string 'name=value', got {o!r}")
        components = o.split('=')
        if len(components) != 2 or not components[0].strip() or not components[1].strip():
            raise ConfigurationError(f"The observation '{o}' is not in the format of 'x = y'")
        pairs.append((components[0].strip(), components[1].strip()))
    return pairs


def split_factors(var, all_factors):
    """
    Splits all_factors into a list that's relevant to the rv and another that's irrelevant.
    A factor is "relevant" to an rv if that rv is in the factor's scope.
    """
    relevant, irrelevant = [], []
    for factor in all_factors:
        if factor.contains_var(var):
            relevant.append(factor)
        else:
            irrelevant.append(factor)
    return relevant, irrelevant


class VariableElimination:
    """
    Exact inference on a BayesianNetwork by variable elimination.

    The object only holds the network; nothing is cached between queries,
    so one instance can answer any number of queries.
    """

    def __init__(self, network: BayesianNetwork, tol=config.NORMALIZATION_TOLERANCE):
        """
        network: the model we are performing VE for
        tol: a result of a query without evidence is only renormalized if its total
            is further than tol from 1.0
        """
        self.network = network
        self.tol = tol

    def get_network(self) -> BayesianNetwork:
        return self.network

    def infer(self, query, evidence=(), trace=None) -> np.ndarray:
        """
        Return the distribution of the query variable given the evidence,
        as an array ordered like the query node's domain.

        query: a BayesianNode or the name of one
        evidence: an iterable of Propositions and/or observation strings "name=value",
            or a single one of them
        trace: if provided, we log here each variable that was eliminated, in order, and the scope
            of the factor from which we eliminated it

        Raises ConfigurationError for malformed observation strings,
        and InferenceError (chained to the cause) for anything that fails during inference.
        """
        if isinstance(evidence, (str, Proposition)):
            evidence = [evidence]
        evidence = list(evidence)
        observations = parse_evidence([e for e in evidence if isinstance(e, str)])
        try:
            if not isinstance(query, BayesianNode):
                query = self.network.find_node(query)
            propositions = [e for e in evidence if not isinstance(e, str)]
            propositions.extend(self.network.find_node(name).instantiate(value) for name, value in observations)
            return self._infer(query, propositions, trace)
        except InferenceError:
            raise
        except (BayesNetError, LookupError, ValueError, TypeError) as e:
            logger.warning("Inference of '%s' failed: %s", getattr(query, "name", query), e)
            raise InferenceError(
                "Unable to perform inference on the network. "
                "Please make sure the network is valid and the propositions are valid. "
                f"(Reason: {e})"
            ) from e

    def _infer(self, query: BayesianNode, evidence: list, trace) -> np.ndarray:
        observed = dict()
        for prop in evidence:
            if not isinstance(prop, Proposition):
                raise ConfigurationError(f"Evidence must be a Proposition or a 'name=value' string, got {prop!r}")
            node = self.network.find_node(prop.name)
            prop = node.instantiate(prop.value_index)
            if observed.get(prop.name, prop) != prop:
                raise ConfigurationError(f"Conflicting evidence for '{prop.name}': {observed[prop.name]} and {prop}")
            observed[prop.name] = prop
        if self.network.find_node(query.name) is not query:
            raise ConfigurationError(f"The query node '{query.name}' does not belong to this network")
        evidence = list(observed.values())

        # keep only the query, the evidence and their ancestors
        keep = {query.name} | observed.keys()
        relevant = self.network.dag.relevant_nodes(keep)
        # children before parents: when a variable is summed out,
        # every factor that mentions it has already been collected
        order = [name for name in self.network.depth_first_order() if name in relevant]
        logger.debug("Elimination order for '%s': %s", query.name, order)

        factors = []
        for name in order:
            node = self.network.find_node(name)
            factors.append(node.make_factor(evidence))
            if name in keep:
                continue
            # separate factors containing this rv in their scope
            involved, factors = split_factors(node.var, factors)
            # take the product of the factors involved in this elimination step
            new_factor = functools.reduce(lambda a, b: a.product(b), involved)
            if trace is not None:
                trace.append((name, new_factor.scope))
            logger.debug("Summing %s out of a factor over %s", name, new_factor.scope)
            factors.append(new_factor.sum_out(node.var))

        result = functools.reduce(lambda a, b: a.product(b), factors)
        if query.name in observed:
            if result.scope:
                raise InferenceError(f"Expected every variable to be eliminated, got a factor over {result.scope}")
            if not result.values.sum() > 0:
                raise InferenceError("The evidence has zero probability")
            point_mass = np.zeros(len(query.var))
            point_mass[observed[query.name].value_index] = 1.0
            return point_mass
        if result.scope != (query.name,):
            raise InferenceError(f"Expected a factor over ('{query.name}',), got one over {result.scope}")
        if evidence:
            # P(query, evidence) is never normalized by construction, however close to 1.0 it is
            return normalize_distribution(result.values, tol=0.0)
        return normalize_distribution(result.values, tol=self.tol)

    def pick_one(self, distribution, rng=np.random.default_rng()) -> int:
        """Draw the index of a value according to the distribution (see sampling.pick_one)"""
        return pick_one(distribution, rng)

    def sample(self, query, evidence=(), rng=np.random.default_rng()) -> Proposition:
        """Infer the distribution of the query and draw one of its values"""
        if not isinstance(query, BayesianNode):
            try:
                query = self.network.find_node(query)
            except BayesNetError as e:
                raise InferenceError(f"Unable to perform inference on the network. (Reason: {e})") from e
        distribution = self.infer(query, evidence)
        return query.instantiate(pick_one(distribution, rng))
