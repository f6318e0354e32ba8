"""
Walling calculator.

Blocks = ceil(net wall area × blocks per m²), where each block face is
inflated by a 20 mm mortar joint on length and height.
Mortar volume = wall volume − solid block volume, split cement:sand.
"""

from ..config import settings
from ..errors import ValidationError
from ..models import MaterialKind
from .base import BaseCalculator
from .materials import blocks_per_square_meter, compute_block_work, parse_block_size, round_up
from .mix import compute_mix

DEFAULT_BLOCK_SIZE = "400x200x200"
DEFAULT_MORTAR_RATIO = "1:4"


class WallingCalculator(BaseCalculator):

    work_type = "walling"

    def __init__(self, catalog=None, mortar_dry_factor: float = None):
        super().__init__(catalog)
        self.mortar_dry_factor = settings.MORTAR_DRY_FACTOR if mortar_dry_factor is None else mortar_dry_factor

    def calculate(self, fields: dict) -> dict:
        length = self.parse_positive(fields.get("length"), "Wall length")
        height = self.parse_positive(fields.get("height"), "Wall height")
        openings = self.parse_number(fields.get("openings_area"), "Openings area", default=0.0)
        if openings < 0:
            raise ValidationError("Openings area cannot be negative")
        block_size = self.parse_text(fields.get("block_size"), DEFAULT_BLOCK_SIZE)
        mortar_ratio = self.parse_text(fields.get("mortar_ratio"), DEFAULT_MORTAR_RATIO)
        include_mortar = _truthy(fields.get("include_mortar", True))

        area = length * height - openings
        if area <= 0:
            raise ValidationError("Openings area must be smaller than the wall area")

        _length, thickness, _height = parse_block_size(block_size)
        block_price = self.catalog.get(MaterialKind.BLOCK).price

        per_m2 = blocks_per_square_meter(block_size)
        block_count = round_up(area * per_m2)
        block_work = compute_block_work(block_count, block_price, block_size)

        lines = [self.make_line(MaterialKind.BLOCK, block_count)]
        assumptions = [
            "Blocks per m² allow a 20 mm mortar joint on length and height.",
            "Block count is rounded up to whole blocks; no breakage allowance.",
        ]

        mortar_volume = max(area * thickness - block_work["volume_per_run"], 0.0)
        if include_mortar and mortar_volume > 0:
            lines.extend(compute_mix(mortar_volume, mortar_ratio, self.mortar_dry_factor,
                                     False, self.catalog))
            assumptions.append(
                "Mortar dry volume = joint volume × %.2f." % self.mortar_dry_factor
            )

        return self.make_result(
            inputs={
                "length": length,
                "height": height,
                "openings_area": openings,
                "block_size": block_size,
                "mortar_ratio": mortar_ratio,
                "include_mortar": include_mortar,
            },
            lines=lines,
            assumptions=assumptions,
            extra={
                "wall_area": round(area, 4),
                "blocks_per_square_meter": round(per_m2, 4),
                "block_volume": round(block_work["volume_per_run"], 4),
                "mortar_volume": round(mortar_volume, 4),
            },
        )


def _truthy(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() not in ("", "0", "false", "no", "off")
    return bool(value)
