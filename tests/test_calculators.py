"""
Work-type calculator tests — concrete, plaster, walling, excavation, registry.
"""

import pytest

from construction_calc.calculators.base import BaseCalculator
from construction_calc.calculators.concrete import ConcreteCalculator
from construction_calc.calculators.excavation import ExcavationCalculator
from construction_calc.calculators.plaster import PlasterCalculator
from construction_calc.calculators.registry import get_calculator, has_calculator, list_calculators
from construction_calc.calculators.walling import WallingCalculator
from construction_calc.errors import ValidationError


# ============================================================
# Framework
# ============================================================

def test_registry_has_all_work_types():
    for work_type in ["excavation", "walling", "concrete", "plaster"]:
        assert work_type in list_calculators()
        assert has_calculator(work_type)
        assert isinstance(get_calculator(work_type), BaseCalculator)


def test_registry_unknown_type_raises():
    with pytest.raises(ValidationError):
        get_calculator("roofing")


def test_parse_number_handles_strings():
    calc = ExcavationCalculator()
    assert calc.parse_number(" 10.5 ", "Length") == 10.5
    assert calc.parse_number("", "Length", default=2.0) == 2.0
    with pytest.raises(ValidationError):
        calc.parse_number("ten", "Length")
    with pytest.raises(ValidationError):
        calc.parse_number(None, "Length")
    with pytest.raises(ValidationError):
        calc.parse_positive("0", "Length")


# ============================================================
# Concrete
# ============================================================

def test_concrete_basic():
    result = ConcreteCalculator(dry_factor=1.54).calculate({"volume": "10", "ratio": "1:2:4"})
    assert result["work_type"] == "concrete"
    assert [item["quantity"] for item in result["items"]] == [64, 8, 20]
    assert result["total_cost"] == 105600
    assert result["dry_volume"] == pytest.approx(15.4)
    assert result["descriptions"][0] == "cement...64...bags...700...44800"


def test_concrete_default_ratio():
    result = ConcreteCalculator(dry_factor=1.54).calculate({"volume": 10})
    assert result["inputs"]["ratio"] == "1:2:4"


def test_concrete_rejects_two_part_ratio():
    with pytest.raises(ValidationError):
        ConcreteCalculator().calculate({"volume": 10, "ratio": "1:4"})


def test_concrete_requires_volume():
    with pytest.raises(ValidationError):
        ConcreteCalculator().calculate({"ratio": "1:2:4"})


# ============================================================
# Plaster
# ============================================================

def test_plaster_basic():
    """10 m² × 15 mm = 0.15 m³ wet → 0.1995 m³ dry at 1.33."""
    result = PlasterCalculator(dry_factor=1.33, thickness_mm=15).calculate({"area": 10})
    assert result["volume"] == pytest.approx(0.15)
    assert [item["name"] for item in result["items"]] == ["cement", "sand"]
    assert [item["quantity"] for item in result["items"]] == [2, 1]


def test_plaster_rejects_ballast_ratio():
    with pytest.raises(ValidationError):
        PlasterCalculator().calculate({"area": 10, "ratio": "1:2:4"})


# ============================================================
# Walling
# ============================================================

def test_walling_blocks_and_mortar():
    """
    10 m × 3 m wall, 400x200x200 blocks:
    blocks/m² = 1 / (0.42 × 0.22) ≈ 10.82 → 325 blocks.
    Mortar = 30 × 0.2 − 325 × 0.016 = 0.8 m³.
    """
    result = WallingCalculator(mortar_dry_factor=1.33).calculate({
        "length": "10", "height": "3", "block_size": "400x200x200",
    })
    items = {item["name"]: item for item in result["items"]}
    assert items["blocks"]["quantity"] == 325
    assert items["blocks"]["cost"] == 21125
    assert result["blocks_per_square_meter"] == pytest.approx(10.8225, abs=1e-4)
    assert result["mortar_volume"] == pytest.approx(0.8)
    assert items["cement"]["quantity"] == 7
    assert items["sand"]["quantity"] == 2


def test_walling_openings_reduce_area():
    full = WallingCalculator().calculate({"length": 10, "height": 3})
    with_door = WallingCalculator().calculate({"length": 10, "height": 3, "openings_area": 2})
    assert with_door["wall_area"] == pytest.approx(28)
    assert with_door["items"][0]["quantity"] < full["items"][0]["quantity"]


def test_walling_without_mortar():
    result = WallingCalculator().calculate({"length": 5, "height": 2, "include_mortar": "no"})
    assert [item["name"] for item in result["items"]] == ["blocks"]


def test_walling_bad_block_size():
    with pytest.raises(ValidationError):
        WallingCalculator().calculate({"length": 5, "height": 2, "block_size": "400/200/200"})


def test_walling_openings_larger_than_wall():
    with pytest.raises(ValidationError):
        WallingCalculator().calculate({"length": 2, "height": 2, "openings_area": 5})


# ============================================================
# Excavation
# ============================================================

def test_excavation_volume_and_cost():
    result = ExcavationCalculator().calculate({"length": 2, "width": 1.5, "depth": 1})
    assert result["volume"] == 3
    assert result["items"][0]["unit"] == "m³"
    assert result["total_cost"] == 1350


def test_excavation_rounds_volume_up():
    result = ExcavationCalculator().calculate({"length": 1.111, "width": 1, "depth": 1})
    assert result["volume"] == 1.12


# ============================================================
# Oversized inputs and explicit factors
# ============================================================

def test_concrete_huge_volume_is_validation_error():
    with pytest.raises(ValidationError):
        ConcreteCalculator(dry_factor=1.54).calculate({"volume": "1e308", "ratio": "1:2:4"})


def test_excavation_huge_dimensions_is_validation_error():
    with pytest.raises(ValidationError):
        ExcavationCalculator().calculate({"length": 1e200, "width": 1e200, "depth": 1})


def test_walling_huge_wall_is_validation_error():
    with pytest.raises(ValidationError):
        WallingCalculator().calculate({"length": 1e308, "height": 1e308})


@pytest.mark.parametrize("calculator,fields", [
    (ConcreteCalculator(dry_factor=0), {"volume": 1, "ratio": "1:2:4"}),
    (PlasterCalculator(dry_factor=0), {"area": 10, "ratio": "1:4"}),
])
def test_explicit_zero_dry_factor_is_not_replaced_by_default(calculator, fields):
    assert calculator.dry_factor == 0
    with pytest.raises(ValidationError):
        calculator.calculate(fields)


def test_walling_explicit_zero_mortar_factor_is_kept():
    calculator = WallingCalculator(mortar_dry_factor=0)
    assert calculator.mortar_dry_factor == 0
    with pytest.raises(ValidationError):
        calculator.calculate({"length": 5, "height": 3})
