import json

from discretebn.errors import ConfigurationError
from discretebn.model import BayesianNetwork, BayesianNode
from discretebn.parsers.base import BayesianParser


class BayesianJsonParser(BayesianParser):
    """
    Parses networks stored as JSON:

        {"nodes": [
            {"name": "rain", "domain": ["true", "false"], "values": [0.2, 0.8], "parents": []},
            {"name": "sprinkler", "domain": ["true", "false"],
             "values": [0.01, 0.99, 0.4, 0.6], "parents": ["rain"]}
        ]}

    A node's parents must be listed before the node.
    """

    def parse(self, text: str) -> BayesianNetwork:
        try:
            document = json.loads(text)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"The string is not valid JSON: {e}") from e

        node_map = dict()
        nodes = []
        try:
            for entry in document["nodes"]:
                name = str(entry["name"])
                domain = [str(d) for d in entry["domain"]]
                values = [float(v) for v in entry["values"]]
                parents = [node_map[str(p)] for p in entry.get("parents", [])]
                node = BayesianNode(name, domain, values, parents)
                nodes.append(node)
                node_map[name] = node
            return BayesianNetwork(nodes)
        except ConfigurationError:
            raise
        except (KeyError, TypeError, AttributeError, ValueError) as e:
            raise ConfigurationError(
                f"Could not read the network, most likely a node is missing a field or lists an unknown parent ({e!r})"
            ) from e
