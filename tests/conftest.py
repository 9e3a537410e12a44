import pytest

from discretebn import BayesianNetwork, BayesianNode, VariableElimination


@pytest.fixture
def rain_sprinkler():
    """Rain -> Sprinkler"""
    rain = BayesianNode("Rain", ["true", "false"], [0.2, 0.8])
    sprinkler = BayesianNode("Sprinkler", ["true", "false"], [0.01, 0.99, 0.4, 0.6], [rain])
    return BayesianNetwork([rain, sprinkler])


@pytest.fixture
def wet_grass():
    """Rain -> Sprinkler, (Sprinkler, Rain) -> GrassWet"""
    rain = BayesianNode("Rain", ["true", "false"], [0.2, 0.8])
    sprinkler = BayesianNode("Sprinkler", ["true", "false"], [0.01, 0.99, 0.4, 0.6], [rain])
    grass = BayesianNode(
        "GrassWet", ["true", "false"],
        [0.99, 0.01,   # Sprinkler=true,  Rain=true
         0.9, 0.1,     # Sprinkler=true,  Rain=false
         0.8, 0.2,     # Sprinkler=false, Rain=true
         0.0, 1.0],    # Sprinkler=false, Rain=false
        [sprinkler, rain],
    )
    return BayesianNetwork([rain, sprinkler, grass])


@pytest.fixture
def npc():
    """
    An NPC decision network with three-valued variables:
        brave, enemy_amount -> fight
        fight, cover_type -> run_away
    """
    brave = BayesianNode("brave", ["True", "False"], [0.5, 0.5])
    enemy = BayesianNode("enemy_amount", ["NoEnemy", "Few", "Many"], [0.2, 0.5, 0.3])
    cover = BayesianNode("cover_type", ["NoCover", "HalfCover", "FullCover"], [0.3, 0.4, 0.3])
    fight = BayesianNode(
        "fight", ["True", "False"],
        [0.1, 0.9, 0.8, 0.2, 0.5, 0.5,      # brave=True
         0.05, 0.95, 0.4, 0.6, 0.1, 0.9],   # brave=False
        [brave, enemy],
    )
    run_away = BayesianNode(
        "run_away", ["True", "False"],
        [0.3, 0.7, 0.2, 0.8, 0.1, 0.9,      # fight=True
         0.9, 0.1, 0.6, 0.4, 0.3, 0.7],     # fight=False
        [fight, cover],
    )
    return BayesianNetwork([brave, enemy, cover, fight, run_away])


@pytest.fixture
def ve(rain_sprinkler):
    return VariableElimination(rain_sprinkler)
