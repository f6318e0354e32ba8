"""
Material domain model — per-request material lines and block geometry.

Catalog entries (price, unit, factor) live in catalog.py and are never
mutated. A calculation produces fresh MaterialLine objects instead.
"""

import math
from dataclasses import dataclass, field

from ..errors import ValidationError

# Mortar joint allowance added to block length and height (metres)
MORTAR_JOINT_M = 0.02


@dataclass
class MaterialLine:
    """A priced, quantified material in one calculation result."""

    name: str
    quantity: float
    unit: str
    price: float
    kind: str = field(default="", compare=False)

    @property
    def cost(self) -> float:
        return self.quantity * self.price

    def describe(self):
        """
        "<name>...<quantity>...<unit>...<price>...<cost>", or None when the
        quantity is zero. Zero-quantity lines are left out of the output.
        """
        if self.quantity == 0:
            return None
        return "%s...%s...%s...%s...%s" % (
            self.name,
            _fmt(self.quantity),
            self.unit,
            _fmt(self.price),
            _fmt(self.cost),
        )

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "name": self.name,
            "quantity": self.quantity,
            "unit": self.unit,
            "price": self.price,
            "cost": round(self.cost, 2),
            "description": self.describe(),
        }


def _fmt(value: float) -> str:
    """Render whole numbers without a trailing .0 (64 not 64.0)."""
    if float(value).is_integer():
        return str(int(value))
    return str(round(value, 4))


def round_up(value: float, ndigits: int = 0) -> float:
    """
    Ceiling to `ndigits` decimals. Float noise below 1e-9 is dropped first
    so 8.000000000001 stays 8 — purchases still never round down.
    """
    scale = 10 ** ndigits
    if not math.isfinite(value * scale):
        raise ValidationError("Quantity is too large to calculate, check the dimensions entered")
    rounded = math.ceil(round(value * scale, 9)) / scale
    return int(rounded) if ndigits == 0 else rounded


def require_number(value, label: str, allow_zero: bool = False) -> float:
    """Reject non-numbers, NaN, inf and negatives (and zero unless allow_zero)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{label} must be a number")
    if not math.isfinite(value):
        raise ValidationError(f"{label} must be a finite number")
    if value < 0 or (value == 0 and not allow_zero):
        raise ValidationError(
            f"{label} must be {'zero or more' if allow_zero else 'greater than zero'}"
        )
    return value


# --- Block geometry ---

def parse_block_size(size: str) -> tuple:
    """
    Parse an "LxTxH" size string in millimetres.

    Returns (length, thickness, height) in metres.
    Raises ValidationError on a wrong separator, a wrong part count,
    or a part that is not a positive number.
    """
    if not isinstance(size, str) or not size.strip():
        raise ValidationError("Block size is required, e.g. 360x180x180 (mm)")

    parts = size.strip().lower().split("x")
    if len(parts) != 3:
        raise ValidationError(
            f"Block size '{size}' must have three parts separated by 'x' (length x thickness x height in mm)"
        )

    dims = []
    for part in parts:
        try:
            value = float(part.strip())
        except ValueError:
            raise ValidationError(f"Block size '{size}' has a non-numeric part '{part.strip()}'")
        if not math.isfinite(value) or value <= 0:
            raise ValidationError(f"Block size '{size}' must contain positive dimensions")
        dims.append(value / 1000)

    return tuple(dims)


def block_volume(size: str, quantity: float) -> float:
    """Solid volume (m³) of `quantity` blocks."""
    length, thickness, height = parse_block_size(size)
    return length * thickness * height * quantity


def blocks_per_square_meter(size: str) -> float:
    """Blocks per m² of wall face, each face inflated by the mortar joint."""
    length, _thickness, height = parse_block_size(size)
    return 1 / ((length + MORTAR_JOINT_M) * (height + MORTAR_JOINT_M))


def compute_block_work(quantity: float, price: float, size: str) -> dict:
    """Volume of a run of `quantity` blocks and the blocks needed per m²."""
    quantity = require_number(quantity, "Block quantity", allow_zero=True)
    price = require_number(price, "Block price", allow_zero=True)

    cost = quantity * price
    volume = block_volume(size, quantity)
    if not (math.isfinite(cost) and math.isfinite(volume)):
        raise ValidationError("Block quantity or price is too large to calculate")

    return {
        "size": size,
        "quantity": quantity,
        "price": price,
        "cost": cost,
        "volume_per_run": volume,
        "blocks_per_square_meter": blocks_per_square_meter(size),
    }
