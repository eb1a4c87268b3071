"""Pydantic models for API request bodies."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class EntryChanges(BaseModel):
    """Full desired state of a customer's day."""

    model_config = ConfigDict(populate_by_name=True)

    cow: float | str | None = None
    buffalo: float | str | None = None
    product_id: str | None = Field(default=None, alias="productId")
    product_quantity: float | str | None = Field(
        default=None, alias="productQuantity"
    )


class SaveEntryRequest(EntryChanges):
    """Save request for a customer on a date."""

    entry_date: str | int | float | None = Field(default=None, alias="date")


class ExtensionPayload(BaseModel):
    """Extension create/rename payload."""

    name: str


class CustomerCreatePayload(BaseModel):
    """New customer under an extension."""

    name: str
    phone: str | None = None
    address: str | None = None


class CustomerUpdatePayload(BaseModel):
    """Customer changes; only provided fields are applied."""

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = None
    phone: str | None = None
    address: str | None = None
    extension_id: UUID | None = Field(default=None, alias="extensionId")
    default_product_id: UUID | None = Field(default=None, alias="defaultProductId")
    default_product_permanent: bool | None = Field(
        default=None, alias="defaultProductPermanent"
    )


class ProductPayload(BaseModel):
    """Product create payload."""

    name: str
    cost: float


class ProductUpdatePayload(BaseModel):
    """Product changes."""

    name: str | None = None
    cost: float | None = None


class MilkPricesPayload(BaseModel):
    """Per-litre milk prices."""

    model_config = ConfigDict(populate_by_name=True)

    cow_price: float = Field(alias="cowPrice")
    buffalo_price: float = Field(alias="buffaloPrice")
