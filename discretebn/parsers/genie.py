import xml.etree.ElementTree as ET

from discretebn.errors import ConfigurationError
from discretebn.model import BayesianNetwork, BayesianNode
from discretebn.parsers.base import BayesianParser


def _local_name(element) -> str:
    """Tag without its namespace"""
    return element.tag.rsplit('}', 1)[-1]


def _children_named(element, name: str) -> list:
    return [child for child in element if _local_name(child) == name]


class BayesianGenieParser(BayesianParser):
    """
    Parses networks in GeNIe 2.0 (XDSL) format:

        <smile>
          <nodes>
            <cpt id="rain">
              <state id="true" /> <state id="false" />
              <probabilities>0.2 0.8</probabilities>
            </cpt>
            <cpt id="sprinkler">
              <state id="true" /> <state id="false" />
              <parents>rain</parents>
              <probabilities>0.01 0.99 0.4 0.6</probabilities>
            </cpt>
          </nodes>
        </smile>

    Only <cpt> nodes are read, and a node's parents must appear before the node.
    """

    def parse(self, text: str) -> BayesianNetwork:
        try:
            root = ET.fromstring(text)
        except ET.ParseError as e:
            raise ConfigurationError(f"The string is not valid XML: {e}") from e

        node_map = dict()
        nodes = []
        try:
            containers = _children_named(root, "nodes")
            if not containers:
                raise ConfigurationError("The GeNIe document has no <nodes> element")
            for cpt in _children_named(containers[0], "cpt"):
                name = cpt.attrib["id"]
                domain = [state.attrib["id"] for state in _children_named(cpt, "state")]
                values = [float(v) for v in _children_named(cpt, "probabilities")[0].text.split()]
                parents = []
                for element in _children_named(cpt, "parents"):
                    parents.extend(node_map[p] for p in (element.text or "").split())
                node = BayesianNode(name, domain, values, parents)
                nodes.append(node)
                node_map[name] = node
            return BayesianNetwork(nodes)
        except ConfigurationError:
            raise
        except (KeyError, IndexError, AttributeError, ValueError) as e:
            raise ConfigurationError(
                f"Could not read the network from the GeNIe document ({e!r})"
            ) from e
