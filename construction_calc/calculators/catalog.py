"""
Material catalog — static price/unit/factor data per material kind.

Fallback chain:
1. MaterialPrice rows in the database (editable via PATCH /api/materials/{kind})
2. DEFAULT_PRICES from this file

Factors convert a volumetric share (m³) into the purchase unit:
bags of cement per m³, tons of sand or ballast per m³.
"""

import logging
from dataclasses import dataclass

from ..errors import ConfigurationError
from ..models import MaterialKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CatalogEntry:
    kind: str
    name: str
    unit: str
    price: float
    factor: float = 1.0


# Nairobi hardware-store prices (KES), 2025
DEFAULT_PRICES = {
    MaterialKind.CEMENT: {"name": "cement", "unit": "bags", "price": 700.0, "factor": 28.96},
    MaterialKind.SAND: {"name": "sand", "unit": "tons", "price": 1350.0, "factor": 1.8},
    MaterialKind.BALLAST: {"name": "ballast", "unit": "tons", "price": 2500.0, "factor": 2.2},
    MaterialKind.BLOCK: {"name": "blocks", "unit": "no", "price": 65.0, "factor": 1.0},
    MaterialKind.EXCAVATION: {"name": "excavation", "unit": "m³", "price": 450.0, "factor": 1.0},
}


class MaterialCatalog:
    """Read-only lookup of CatalogEntry by kind."""

    def __init__(self, entries):
        self._entries = {}
        for entry in entries:
            self._entries[_kind_key(entry.kind)] = entry

    @classmethod
    def default(cls) -> "MaterialCatalog":
        return cls(
            CatalogEntry(kind=kind.value, **data) for kind, data in DEFAULT_PRICES.items()
        )

    @classmethod
    def from_rows(cls, rows) -> "MaterialCatalog":
        """
        Build from MaterialPrice rows. Kinds without a row keep their
        default entry so a partially seeded database still works.
        """
        entries = {entry.kind: entry for entry in cls.default()}
        for row in rows:
            entries[row.kind] = CatalogEntry(
                kind=row.kind,
                name=row.name,
                unit=row.unit,
                price=row.price,
                factor=row.factor if row.factor is not None else 1.0,
            )
        logger.debug("Catalog built from %d database rows", len(rows))
        return cls(entries.values())

    def get(self, kind) -> CatalogEntry:
        key = _kind_key(kind)
        if key not in self._entries:
            raise ConfigurationError(
                f"No catalog entry for material '{key}'. "
                f"Available: {sorted(self._entries)}"
            )
        return self._entries[key]

    def has(self, kind) -> bool:
        return _kind_key(kind) in self._entries

    def kinds(self) -> list:
        return list(self._entries)

    def __iter__(self):
        return iter(self._entries.values())

    def __len__(self):
        return len(self._entries)


def _kind_key(kind) -> str:
    return kind.value if isinstance(kind, MaterialKind) else str(kind)
