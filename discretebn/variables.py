from typing import NamedTuple

from discretebn.errors import ConfigurationError


class RandomVariable:
    """
    A named discrete random variable with an ordered, finite domain of tokens.

    Each token is mapped to a unique 0-based identifier (its index in the domain),
     this way a factor can use an np.array to store a dense table:
     each axis is associated with a variable and the identifier of a token
     is the position along that axis.

    Two variables are equal if and only if they have the same name.
    """

    __slots__ = ("_name", "_domain", "_token2id")

    def __init__(self, name: str, domain):
        """
        name: the name of the rv (unique within a network)
        domain: an iterable of tokens (strings), in order; at least one, no repetitions
        """
        domain = tuple(str(token) for token in domain)
        if len(domain) == 0:
            raise ConfigurationError(f"The variable '{name}' needs at least one value in its domain")
        token2id = {token: i for i, token in enumerate(domain)}
        if len(token2id) != len(domain):
            raise ConfigurationError(f"The domain of '{name}' has repeated values: {domain}")
        object.__setattr__(self, "_name", str(name))
        object.__setattr__(self, "_domain", domain)
        object.__setattr__(self, "_token2id", token2id)

    def __setattr__(self, key, value):
        raise AttributeError("RandomVariable is immutable")

    @property
    def name(self) -> str:
        return self._name

    @property
    def domain(self) -> tuple:
        return self._domain

    def __len__(self):
        """Return the arity (number of tokens)"""
        return len(self._domain)

    def __iter__(self):
        return iter(self._domain)

    def __contains__(self, token):
        return token in self._token2id

    def index(self, token: str) -> int:
        """Return the index of a token in the domain"""
        try:
            return self._token2id[token]
        except KeyError:
            raise ConfigurationError(
                f"'{token}' is not a value of '{self._name}', expected one of {list(self._domain)}"
            ) from None

    def token(self, index: int) -> str:
        """Return the token at a domain index"""
        if not 0 <= index < len(self._domain):
            raise ConfigurationError(
                f"Index {index} is out of range for '{self._name}' (arity {len(self._domain)})"
            )
        return self._domain[index]

    def __eq__(self, other):
        if other is self:
            return True
        if not isinstance(other, RandomVariable):
            return NotImplemented
        return self._name == other._name

    def __hash__(self):
        return hash(self._name)

    def __repr__(self):
        return f"RandomVariable({self._name!r}, {list(self._domain)!r})"

    def __str__(self):
        return self._name


class Proposition(NamedTuple):
    """
    An instantiation of a variable, e.g. fight=true.
    Use BayesianNode.instantiate to build one, it takes care of the value index.
    """
    name: str
    value: str
    value_index: int

    def __str__(self):
        return f"{self.name}={self.value}"
