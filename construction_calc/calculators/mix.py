"""
Mix calculator — cement/sand[/ballast] purchase quantities for a volume.

Algorithm:
    total      = sum of ratio parts
    dry_volume = volume × dry factor
    share_i    = part_i / total × dry_volume
    quantity_i = ceil(share_i × material factor_i)

Pure function of its inputs and the catalog. Every call returns new
MaterialLine objects; catalog entries are never written to.
"""

import math

from ..errors import ValidationError
from ..models import MaterialKind
from .catalog import MaterialCatalog
from .materials import MaterialLine, require_number, round_up

# Ratio position -> material kind
MIX_COMPONENTS = (MaterialKind.CEMENT, MaterialKind.SAND, MaterialKind.BALLAST)


def parse_ratio(ratio: str, has_ballast: bool = False) -> list:
    """
    Parse "a:b" (has_ballast=False) or "a:b:c" (has_ballast=True) into floats.

    Raises ValidationError when a part is not a number, a part is negative,
    all parts are zero, or the part count does not match has_ballast.
    """
    if not isinstance(ratio, str) or not ratio.strip():
        raise ValidationError("Mix ratio is required, e.g. 1:2:4")

    raw_parts = ratio.strip().split(":")
    expected = 3 if has_ballast else 2
    if len(raw_parts) != expected:
        raise ValidationError(
            f"Mix ratio '{ratio}' must have {expected} parts "
            f"({'cement:sand:ballast' if has_ballast else 'cement:sand'})"
        )

    parts = []
    for raw in raw_parts:
        try:
            value = float(raw.strip())
        except ValueError:
            raise ValidationError(f"Mix ratio '{ratio}' has a non-numeric part '{raw.strip()}'")
        if not math.isfinite(value) or value < 0:
            raise ValidationError(f"Mix ratio '{ratio}' parts must be zero or positive numbers")
        parts.append(value)

    if sum(parts) <= 0:
        raise ValidationError(f"Mix ratio '{ratio}' must have at least one non-zero part")

    return parts


def compute_mix(volume: float, ratio: str, factor: float, has_ballast: bool,
                catalog: MaterialCatalog) -> list:
    """
    Required purchase quantity of each mix component.

    Args:
        volume: wet/compacted volume in m³
        ratio: "cement:sand" or "cement:sand:ballast"
        factor: dry-volume factor (1.54 concrete, 1.33 mortar/plaster)
        has_ballast: True for concrete (3-part ratio)
        catalog: supplies price, unit and material factor per component

    Returns:
        list of MaterialLine in ratio order — cement, sand[, ballast]
    """
    volume = float(require_number(volume, "Volume"))
    factor = float(require_number(factor, "Dry volume factor"))
    parts = parse_ratio(ratio, has_ballast)

    total = sum(parts)
    dry_volume = volume * factor
    if not math.isfinite(dry_volume):
        raise ValidationError("Volume is too large to calculate")

    lines = []
    for part, kind in zip(parts, MIX_COMPONENTS):
        entry = catalog.get(kind)
        share = (part / total) * dry_volume
        lines.append(MaterialLine(
            name=entry.name,
            quantity=round_up(share * entry.factor),
            unit=entry.unit,
            price=entry.price,
            kind=entry.kind,
        ))
    return lines


def describe_lines(lines: list) -> list:
    """describe() of each line, dropping the zero-quantity ones."""
    return [text for text in (line.describe() for line in lines) if text is not None]
