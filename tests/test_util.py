"""
Tests for table views, the brute-force oracle, logging setup and the command-line tool.

Run with:
    pytest tests/test_util.py -v
"""

import json
import logging

import numpy as np
import pytest

from discretebn import Factor, RandomVariable
from discretebn.__main__ import guess_format, main
from discretebn.logging_config import configure_logging
from discretebn.util import (
    brute_force_query,
    display_distribution,
    distribution_to_df,
    factor_to_df,
    network_to_factor,
    tvd,
)


# =============================================================================
# TABLE VIEWS
# =============================================================================

class TestTables:

    def test_factor_to_df(self, rain_sprinkler):
        df = factor_to_df(rain_sprinkler.find_node("Sprinkler").cpt)
        assert list(df.columns) == ["Rain", "Sprinkler", "Value"]
        assert len(df) == 4
        assert df.iloc[2].tolist() == ["false", "true", 0.4]

    def test_distribution_to_df(self, rain_sprinkler):
        df = distribution_to_df(rain_sprinkler.find_node("Rain"), [0.2, 0.8])
        assert df["Rain"].tolist() == ["true", "false"]
        assert df["P"].tolist() == [0.2, 0.8]

    def test_display_distribution(self, rain_sprinkler):
        text = display_distribution(rain_sprinkler.find_node("Sprinkler"), [0.322, 0.678])
        assert "0.322" in text and "Sprinkler" in text


# =============================================================================
# ORACLE AND DISTANCES
# =============================================================================

class TestOracle:

    def test_joint_sums_to_one(self, npc):
        joint = network_to_factor(npc)
        assert set(joint.scope) == {"brave", "enemy_amount", "cover_type", "fight", "run_away"}
        assert joint.values.sum() == pytest.approx(1.0)

    def test_brute_force_query(self, rain_sprinkler):
        np.testing.assert_allclose(brute_force_query(rain_sprinkler, "Sprinkler"), [0.322, 0.678])

    def test_brute_force_observed_query(self, rain_sprinkler):
        evidence = [rain_sprinkler.find_node("Rain").instantiate("false")]
        np.testing.assert_array_equal(brute_force_query(rain_sprinkler, "Rain", evidence), [0.0, 1.0])

    def test_tvd_arrays(self):
        assert tvd(np.array([0.2, 0.8]), np.array([0.5, 0.5])) == pytest.approx(0.3)

    def test_tvd_factors_ignores_variable_order(self):
        A = RandomVariable("A", ["0", "1"])
        B = RandomVariable("B", ["0", "1", "2"])
        p = Factor([A, B], np.arange(6) / 15)
        q = Factor([B, A], p.values.T)
        assert tvd(p, q) == pytest.approx(0.0)

    def test_tvd_mixed_types(self):
        with pytest.raises(NotImplementedError):
            tvd(np.array([1.0]), Factor([], 1.0))


# =============================================================================
# LOGGING
# =============================================================================

class TestLogging:

    def test_configure_logging(self, monkeypatch):
        root = logging.getLogger()
        monkeypatch.setattr(root, "handlers", [])
        monkeypatch.setattr(root, "level", root.level)
        configure_logging("debug")
        assert len(root.handlers) == 1
        assert root.level == logging.DEBUG
        # a second call is a no-op
        configure_logging("info")
        assert len(root.handlers) == 1
        assert root.level == logging.DEBUG

    def test_log_file(self, monkeypatch, tmp_path):
        root = logging.getLogger()
        monkeypatch.setattr(root, "handlers", [])
        monkeypatch.setattr(root, "level", root.level)
        configure_logging(logging.INFO, log_file=str(tmp_path / "run.log"))
        assert len(root.handlers) == 2
        for handler in root.handlers:
            handler.close()


# =============================================================================
# COMMAND LINE
# =============================================================================

@pytest.fixture
def network_file(tmp_path):
    doc = {
        "nodes": [
            {"name": "Rain", "domain": ["true", "false"], "values": [0.2, 0.8], "parents": []},
            {"name": "Sprinkler", "domain": ["true", "false"], "values": [0.01, 0.99, 0.4, 0.6], "parents": ["Rain"]},
        ]
    }
    path = tmp_path / "network.json"
    path.write_text(json.dumps(doc))
    return path


class TestCommandLine:

    def test_guess_format(self, tmp_path):
        assert guess_format(tmp_path / "net.xdsl") == "genie"
        assert guess_format(tmp_path / "net.XML") == "genie"
        assert guess_format(tmp_path / "net.json") == "json"

    def test_query(self, network_file, capsys):
        assert main([str(network_file), "Sprinkler"]) == 0
        out = capsys.readouterr().out
        assert "0.322" in out and "0.678" in out

    def test_query_with_evidence_and_sample(self, network_file, capsys):
        assert main([str(network_file), "Rain", "Sprinkler=true", "--sample", "--seed", "3"]) == 0
        out = capsys.readouterr().out
        assert "sample: Rain=" in out

    def test_bad_evidence(self, network_file, capsys):
        assert main([str(network_file), "Rain", "Sprinkler"]) == 2
        assert "error:" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "nope.json"), "Rain"]) == 2
        assert "error:" in capsys.readouterr().err
