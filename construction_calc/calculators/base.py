"""
Abstract base class for all work-type calculators.

Input: fields dict (parsed request body)
Output: result dict — {work_type, inputs, items, descriptions, total_cost, assumptions}
"""

import logging
import math
from abc import ABC, abstractmethod

from ..errors import ValidationError
from .catalog import MaterialCatalog
from .materials import MaterialLine

logger = logging.getLogger(__name__)


class BaseCalculator(ABC):
    """All work-type calculators inherit from this."""

    work_type = ""

    def __init__(self, catalog: MaterialCatalog = None):
        self.catalog = catalog or MaterialCatalog.default()

    @abstractmethod
    def calculate(self, fields: dict) -> dict:
        """
        Takes the submitted fields.
        Returns a result dict built by make_result().
        """
        pass

    # --- Helper methods for all calculators ---

    def parse_number(self, value, label: str, default: float = None) -> float:
        """
        Parse a numeric value from user input. Handles strings like '10', '10.5'.
        Missing values fall back to `default`; garbage raises ValidationError.
        """
        if value is None or (isinstance(value, str) and not value.strip()):
            if default is None:
                raise ValidationError(f"{label} is required")
            return default
        if isinstance(value, bool):
            raise ValidationError(f"{label} must be a number")
        try:
            number = float(str(value).strip())
        except (ValueError, TypeError):
            raise ValidationError(f"{label} must be a number, got '{value}'")
        if not math.isfinite(number):
            raise ValidationError(f"{label} must be a finite number")
        return number

    def parse_positive(self, value, label: str, default: float = None) -> float:
        """parse_number, then reject zero and negatives."""
        number = self.parse_number(value, label, default)
        if number <= 0:
            raise ValidationError(f"{label} must be greater than zero")
        return number

    def parse_text(self, value, default: str = "") -> str:
        if value is None:
            return default
        text = str(value).strip()
        return text or default

    def make_line(self, kind, quantity: float) -> MaterialLine:
        """Build a MaterialLine for `kind` priced from the catalog."""
        entry = self.catalog.get(kind)
        return MaterialLine(
            name=entry.name,
            quantity=quantity,
            unit=entry.unit,
            price=entry.price,
            kind=entry.kind,
        )

    def make_result(self, inputs: dict, lines: list, assumptions: list = None,
                    extra: dict = None) -> dict:
        """Assemble the result dict every calculator returns."""
        total = sum(line.cost for line in lines)
        if not math.isfinite(total):
            raise ValidationError("Quantities are too large to price, check the values entered")
        items = [line.to_dict() for line in lines]
        result = {
            "work_type": self.work_type,
            "inputs": inputs,
            "items": items,
            "descriptions": [item["description"] for item in items if item["description"] is not None],
            "total_cost": round(total, 2),
            "assumptions": assumptions or [],
        }
        if extra:
            result.update(extra)
        logger.debug("%s result: %d items, total %.2f", self.work_type, len(items), result["total_cost"])
        return result
