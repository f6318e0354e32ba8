"""
Concrete calculator.

Volume (m³) × dry factor, split by a cement:sand:ballast ratio.
"""

from ..config import settings
from .base import BaseCalculator
from .mix import compute_mix

DEFAULT_RATIO = "1:2:4"


class ConcreteCalculator(BaseCalculator):

    work_type = "concrete"

    def __init__(self, catalog=None, dry_factor: float = None):
        super().__init__(catalog)
        self.dry_factor = settings.CONCRETE_DRY_FACTOR if dry_factor is None else dry_factor

    def calculate(self, fields: dict) -> dict:
        volume = self.parse_positive(fields.get("volume"), "Concrete volume")
        ratio = self.parse_text(fields.get("ratio"), DEFAULT_RATIO)

        lines = compute_mix(volume, ratio, self.dry_factor, True, self.catalog)

        return self.make_result(
            inputs={"volume": volume, "ratio": ratio, "dry_factor": self.dry_factor},
            lines=lines,
            assumptions=[
                "Dry volume = wet volume × %.2f to allow for voids and shrinkage." % self.dry_factor,
                "Quantities are rounded up to whole purchase units.",
            ],
            extra={"dry_volume": round(volume * self.dry_factor, 4)},
        )
