"""
Plaster calculator.

Area (m²) × thickness gives the wet mortar volume; cement:sand split
with the mortar dry factor.
"""

from ..config import settings
from .base import BaseCalculator
from .mix import compute_mix

DEFAULT_RATIO = "1:4"


class PlasterCalculator(BaseCalculator):

    work_type = "plaster"

    def __init__(self, catalog=None, dry_factor: float = None, thickness_mm: float = None):
        super().__init__(catalog)
        self.dry_factor = settings.MORTAR_DRY_FACTOR if dry_factor is None else dry_factor
        self.thickness_mm = settings.PLASTER_THICKNESS_MM if thickness_mm is None else thickness_mm

    def calculate(self, fields: dict) -> dict:
        area = self.parse_positive(fields.get("area"), "Plaster area")
        thickness_mm = self.parse_positive(fields.get("thickness_mm"), "Plaster thickness",
                                           default=self.thickness_mm)
        ratio = self.parse_text(fields.get("ratio"), DEFAULT_RATIO)

        volume = area * thickness_mm / 1000
        lines = compute_mix(volume, ratio, self.dry_factor, False, self.catalog)

        return self.make_result(
            inputs={"area": area, "thickness_mm": thickness_mm, "ratio": ratio,
                    "dry_factor": self.dry_factor},
            lines=lines,
            assumptions=[
                "Plaster volume = area × %.0f mm thickness." % thickness_mm,
                "Quantities are rounded up to whole purchase units.",
            ],
            extra={"volume": round(volume, 4)},
        )
