"""
Excavation calculator — trench/pit volume priced per m³.
"""

from ..models import MaterialKind
from .base import BaseCalculator
from .materials import round_up


class ExcavationCalculator(BaseCalculator):

    work_type = "excavation"

    def calculate(self, fields: dict) -> dict:
        length = self.parse_positive(fields.get("length"), "Excavation length")
        width = self.parse_positive(fields.get("width"), "Excavation width")
        depth = self.parse_positive(fields.get("depth"), "Excavation depth")

        volume = round_up(length * width * depth, 2)
        line = self.make_line(MaterialKind.EXCAVATION, volume)

        return self.make_result(
            inputs={"length": length, "width": width, "depth": depth},
            lines=[line],
            assumptions=["Volume measured in place (bank volume); no bulking allowance."],
            extra={"volume": volume},
        )
