"""
Ready-made catalogs and objective sets for reinforced-concrete frame studies.

These mirror the defaults the domain application starts from; callers are
free to build their own catalog and objectives instead.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from designopt.foundation.catalog import (
    DesignVariable,
    Direction,
    Objective,
    ObjectiveConstraint,
    ObjectiveSet,
    VariableKind,
)


def default_design_variables() -> tuple[DesignVariable, ...]:
    return (
        DesignVariable("beamWidth", VariableKind.DISCRETE, 200, 600, step=50, current=300, description="Beam width", units="mm"),
        DesignVariable("beamHeight", VariableKind.DISCRETE, 300, 800, step=50, current=500, description="Beam height", units="mm"),
        DesignVariable("columnSize", VariableKind.DISCRETE, 300, 800, step=50, current=400, description="Column dimension", units="mm"),
        DesignVariable(
            "concreteGrade",
            VariableKind.CATEGORICAL,
            options=("fc20", "fc25", "fc30", "fc35", "fc40"),
            current="fc25",
            description="Concrete grade",
            units="MPa",
        ),
        DesignVariable(
            "steelGrade",
            VariableKind.CATEGORICAL,
            options=("BJ34", "BJ37", "BJ41", "BJ50", "BJ55"),
            current="BJ41",
            description="Steel grade",
            units="MPa",
        ),
        DesignVariable("slabThickness", VariableKind.DISCRETE, 100, 300, step=25, current=150, description="Slab thickness", units="mm"),
    )


def default_objectives() -> ObjectiveSet:
    return ObjectiveSet(
        [
            Objective("totalCost", Direction.MINIMIZE, 0.4, "high", ObjectiveConstraint(max=10_000_000_000), "IDR"),
            Objective("structuralWeight", Direction.MINIMIZE, 0.2, "medium", units="kg"),
            Objective("carbonFootprint", Direction.MINIMIZE, 0.2, "high", units="kg CO2e"),
            Objective("safetyFactor", Direction.MAXIMIZE, 0.1, "high", ObjectiveConstraint(min=1.5), "ratio"),
            Objective("constructability", Direction.MAXIMIZE, 0.1, "medium", ObjectiveConstraint(min=0.7), "score"),
        ]
    )


def sustainability_objectives() -> ObjectiveSet:
    return ObjectiveSet(
        [
            Objective("carbonFootprint", Direction.MINIMIZE, 0.3, "high", units="kg CO2e"),
            Objective("embodiedEnergy", Direction.MINIMIZE, 0.2, "high", units="MJ"),
            Objective("recyclability", Direction.MAXIMIZE, 0.2, "medium", units="percentage"),
            Objective("resourceEfficiency", Direction.MAXIMIZE, 0.15, "medium", units="percentage"),
            Objective("lifeCycleCost", Direction.MINIMIZE, 0.15, "medium", units="IDR"),
        ]
    )


@dataclass(frozen=True)
class SocialImpact:
    local_materials: float = 0.0  # percentage
    labor_intensity: float = 0.0  # hours per unit
    community_benefit: float = 0.0  # score 0-100


@dataclass(frozen=True)
class SustainabilityMetrics:
    """Evaluator output of a sustainability run."""

    carbon_footprint: float  # kg CO2e
    embodied_energy: float  # MJ
    recyclability: float  # percentage
    durability: float  # years
    resource_efficiency: float  # percentage
    environmental_impact: float  # normalized score 0-100
    life_cycle_cost: float  # IDR
    social_impact: SocialImpact = field(default_factory=SocialImpact)

    def objective_values(self) -> dict[str, float]:
        """Values keyed by the names of :func:`sustainability_objectives`."""
        return {
            "carbonFootprint": self.carbon_footprint,
            "embodiedEnergy": self.embodied_energy,
            "recyclability": self.recyclability,
            "resourceEfficiency": self.resource_efficiency,
            "lifeCycleCost": self.life_cycle_cost,
        }

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "SustainabilityMetrics":
        social = data.get("social_impact") or {}
        return cls(
            carbon_footprint=float(data["carbon_footprint"]),
            embodied_energy=float(data["embodied_energy"]),
            recyclability=float(data["recyclability"]),
            durability=float(data.get("durability", 0.0)),
            resource_efficiency=float(data["resource_efficiency"]),
            environmental_impact=float(data.get("environmental_impact", 0.0)),
            life_cycle_cost=float(data["life_cycle_cost"]),
            social_impact=social if isinstance(social, SocialImpact) else SocialImpact(**social),
        )


@dataclass(frozen=True)
class RecommendationRule:
    """Adds ``message`` to a result whose ``objective`` value is below ``threshold``."""

    objective: str
    threshold: float
    message: str

    def applies(self, objectives: Mapping[str, float]) -> bool:
        value = objectives.get(self.objective)
        return value is not None and value < self.threshold


DEFAULT_RECOMMENDATION_RULES: tuple[RecommendationRule, ...] = (
    RecommendationRule("totalCost", 5_000_000_000, "Cost-effective solution achieved"),
    RecommendationRule("structuralWeight", 50_000, "Lightweight design achieved"),
    RecommendationRule("carbonFootprint", 10_000, "Low carbon footprint design"),
)

# PerformanceSnapshot field -> objective name
DEFAULT_PERFORMANCE_FIELDS: Mapping[str, str] = {
    "cost": "totalCost",
    "weight": "structuralWeight",
    "sustainability": "carbonFootprint",
    "safety": "safetyFactor",
    "constructability": "constructability",
}


__all__ = [
    "default_design_variables",
    "default_objectives",
    "sustainability_objectives",
    "SocialImpact",
    "SustainabilityMetrics",
    "RecommendationRule",
    "DEFAULT_RECOMMENDATION_RULES",
    "DEFAULT_PERFORMANCE_FIELDS",
]
