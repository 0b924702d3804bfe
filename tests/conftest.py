from __future__ import annotations

import pytest

from designopt.foundation.catalog import DesignVariable, Direction, Objective, ObjectiveSet, VariableKind

GRADES = ("fc20", "fc25", "fc30")


@pytest.fixture
def beam_catalog() -> tuple[DesignVariable, ...]:
    return (
        DesignVariable("beamWidth", VariableKind.DISCRETE, 200, 600, step=50),
        DesignVariable("concreteGrade", VariableKind.CATEGORICAL, options=GRADES),
    )


@pytest.fixture
def mixed_catalog() -> tuple[DesignVariable, ...]:
    return (
        DesignVariable("beamWidth", VariableKind.DISCRETE, 200, 600, step=50),
        DesignVariable("ratio", VariableKind.CONTINUOUS, 0.0, 1.0),
        DesignVariable("concreteGrade", VariableKind.CATEGORICAL, options=GRADES),
        DesignVariable("slabThickness", VariableKind.DISCRETE, 100, 300, step=25),
    )


@pytest.fixture
def cost_weight_objectives() -> ObjectiveSet:
    return ObjectiveSet(
        [
            Objective("cost", Direction.MINIMIZE, 0.6),
            Objective("weight", Direction.MINIMIZE, 0.4),
        ]
    )


def _cost_weight(candidate):
    width = float(candidate.genes["beamWidth"])
    grade = GRADES.index(candidate.genes["concreteGrade"])
    return {"cost": width * 10 + grade * 1000, "weight": width * 2}


def _conflicting(candidate):
    width = float(candidate.genes["beamWidth"])
    return {"cost": width * 10, "weight": 1.0e6 / width}


@pytest.fixture
def cost_weight_evaluator():
    """cost grows with width and grade, weight with width: (200, fc20) wins both."""
    return _cost_weight


@pytest.fixture
def conflicting_evaluator():
    """cost grows and weight shrinks with width: every width is Pareto-optimal."""
    return _conflicting
