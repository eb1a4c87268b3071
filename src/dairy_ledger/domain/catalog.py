"""Domain models for reference data."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class Extension:
    """A delivery zone grouping a set of customers."""

    id: UUID
    name: str


@dataclass(frozen=True)
class Customer:
    """A customer on a delivery route."""

    id: UUID
    name: str
    phone: str | None = None
    address: str | None = None
    extension_id: UUID | None = None
    default_product_id: UUID | None = None
    default_product_permanent: bool = False


@dataclass(frozen=True)
class Product:
    """A sellable product with its current per-unit cost."""

    id: UUID
    name: str
    cost: float


@dataclass(frozen=True)
class MilkPrices:
    """Current per-litre milk prices."""

    cow_price: float
    buffalo_price: float
