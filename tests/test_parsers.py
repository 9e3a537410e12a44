"""
Tests for the network loaders (discretebn.parsers).

Run with:
    pytest tests/test_parsers.py -v
"""

import json

import numpy as np
import pytest

from discretebn import ConfigurationError, VariableElimination
from discretebn.parsers import BayesianGenieParser, BayesianJsonParser, BayesianParser


RAIN_SPRINKLER_JSON = {
    "nodes": [
        {"name": "Rain", "domain": ["true", "false"], "values": [0.2, 0.8], "parents": []},
        {"name": "Sprinkler", "domain": ["true", "false"], "values": [0.01, 0.99, 0.4, 0.6], "parents": ["Rain"]},
    ]
}

RAIN_SPRINKLER_XDSL = """<?xml version="1.0" encoding="ISO-8859-1"?>
<smile version="1.0" id="Network1" numsamples="1000" discsamples="10000">
  <nodes>
    <cpt id="Rain">
      <state id="true" />
      <state id="false" />
      <probabilities>0.2 0.8</probabilities>
    </cpt>
    <cpt id="Sprinkler">
      <state id="true" />
      <state id="false" />
      <parents>Rain</parents>
      <probabilities>0.01 0.99 0.4 0.6</probabilities>
    </cpt>
  </nodes>
  <extensions />
</smile>
"""


class TestJsonParser:

    def test_parse(self):
        network = BayesianJsonParser().parse(json.dumps(RAIN_SPRINKLER_JSON))
        assert [n.name for n in network] == ["Rain", "Sprinkler"]
        assert network.find_node("Sprinkler").parents == ("Rain",)
        np.testing.assert_allclose(VariableElimination(network).infer("Sprinkler"), [0.322, 0.678])

    def test_parse_file(self, tmp_path):
        path = tmp_path / "network.json"
        path.write_text(json.dumps(RAIN_SPRINKLER_JSON))
        network = BayesianJsonParser().parse_file(path)
        assert len(network) == 2

    def test_parents_are_optional(self):
        doc = {"nodes": [{"name": "Coin", "domain": ["h", "t"], "values": [0.5, 0.5]}]}
        assert len(BayesianJsonParser().parse(json.dumps(doc))) == 1

    def test_invalid_json(self):
        with pytest.raises(ConfigurationError):
            BayesianJsonParser().parse("{nodes: ")

    def test_parent_listed_after_child(self):
        doc = {"nodes": list(reversed(RAIN_SPRINKLER_JSON["nodes"]))}
        with pytest.raises(ConfigurationError):
            BayesianJsonParser().parse(json.dumps(doc))

    @pytest.mark.parametrize("doc", [
        {},
        [],
        {"nodes": [{"name": "Rain", "domain": ["true", "false"]}]},
        {"nodes": [{"name": "Rain", "domain": ["true", "false"], "values": ["x", "y"]}]},
        {"nodes": ["Rain"]},
    ])
    def test_malformed_document(self, doc):
        with pytest.raises(ConfigurationError):
            BayesianJsonParser().parse(json.dumps(doc))

    def test_bad_cpt_is_reported(self):
        doc = {"nodes": [{"name": "Rain", "domain": ["true", "false"], "values": [0.2, 0.2, 0.6]}]}
        with pytest.raises(ConfigurationError):
            BayesianJsonParser().parse(json.dumps(doc))


class TestGenieParser:

    def test_parse(self):
        network = BayesianGenieParser().parse(RAIN_SPRINKLER_XDSL)
        assert network.find_node("Rain").domain == ("true", "false")
        np.testing.assert_allclose(
            VariableElimination(network).infer("Rain", ["Sprinkler=true"]),
            np.array([0.002, 0.32]) / 0.322,
        )

    def test_namespaces_are_ignored(self):
        text = RAIN_SPRINKLER_XDSL.replace('<smile ', '<smile xmlns="http://example.com/smile" ')
        assert len(BayesianGenieParser().parse(text)) == 2

    def test_parse_file(self, tmp_path):
        path = tmp_path / "network.xdsl"
        path.write_text(RAIN_SPRINKLER_XDSL)
        assert len(BayesianGenieParser().parse_file(path)) == 2

    def test_invalid_xml(self):
        with pytest.raises(ConfigurationError):
            BayesianGenieParser().parse("<smile><nodes>")

    def test_missing_nodes(self):
        with pytest.raises(ConfigurationError):
            BayesianGenieParser().parse("<smile />")

    def test_missing_probabilities(self):
        text = RAIN_SPRINKLER_XDSL.replace("<probabilities>0.2 0.8</probabilities>", "")
        with pytest.raises(ConfigurationError):
            BayesianGenieParser().parse(text)

    def test_unknown_parent(self):
        text = RAIN_SPRINKLER_XDSL.replace("<parents>Rain</parents>", "<parents>Cloudy</parents>")
        with pytest.raises(ConfigurationError):
            BayesianGenieParser().parse(text)


def test_base_parser_is_abstract():
    with pytest.raises(NotImplementedError):
        BayesianParser().parse("")
