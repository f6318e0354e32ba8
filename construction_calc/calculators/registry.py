"""
Calculator registry — maps work_type strings to calculator classes.
"""

from ..errors import ValidationError
from .base import BaseCalculator
from .concrete import ConcreteCalculator
from .excavation import ExcavationCalculator
from .plaster import PlasterCalculator
from .walling import WallingCalculator

CALCULATOR_REGISTRY: dict[str, type] = {
    "excavation": ExcavationCalculator,
    "walling": WallingCalculator,
    "concrete": ConcreteCalculator,
    "plaster": PlasterCalculator,
}


def get_calculator(work_type: str, catalog=None) -> BaseCalculator:
    """Returns an instance of the calculator for a work type, or raises ValidationError."""
    if work_type not in CALCULATOR_REGISTRY:
        raise ValidationError(
            f"No calculator registered for work type: {work_type}. "
            f"Available: {list(CALCULATOR_REGISTRY.keys())}"
        )
    return CALCULATOR_REGISTRY[work_type](catalog)


def has_calculator(work_type: str) -> bool:
    """Check if a calculator exists for a work type."""
    return work_type in CALCULATOR_REGISTRY


def list_calculators() -> list[str]:
    """List all registered work types."""
    return list(CALCULATOR_REGISTRY.keys())
