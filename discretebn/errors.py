"""
Exceptions raised by discretebn.

    ConfigurationError  malformed construction input (fail fast, before inference)
    NotFoundError       lookup of a node that is not in the network
    InferenceError      anything that goes wrong inside a query, wrapping the cause
"""


class BayesNetError(Exception):
    """Base class for all errors raised by this package."""
    pass


class ConfigurationError(BayesNetError, ValueError):
    """Raised when a variable, factor, node, network or evidence string is malformed."""
    pass


class NotFoundError(BayesNetError, KeyError):
    """Raised when a node name is not registered in the network."""

    def __str__(self):
        # KeyError would otherwise repr() the message
        return str(self.args[0]) if self.args else ""


class InferenceError(BayesNetError, RuntimeError):
    """Raised once per query when elimination fails; the original error is the __cause__."""
    pass
