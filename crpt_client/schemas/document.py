"""Pydantic schemas for the goods introduction document.

Field names follow the registry's JSON: snake_case throughout except
``participantInn`` and ``importRequest``. Every field is optional so an empty
document can be built and serialized.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Description(BaseModel):
    """Participant block of the document."""

    model_config = ConfigDict(populate_by_name=True)

    participant_inn: str | None = Field(
        default=None,
        alias="participantInn",
        description="Taxpayer number of the participant.",
    )


class Product(BaseModel):
    """A single product line being introduced into circulation."""

    certificate_document: str | None = None
    certificate_document_date: str | None = None
    certificate_document_number: str | None = None
    owner_inn: str | None = None
    producer_inn: str | None = None
    production_date: str | None = None
    tnved_code: str | None = Field(
        default=None,
        description="Commodity nomenclature code of the product.",
    )
    uit_code: str | None = Field(default=None, description="Unique identification code.")
    uitu_code: str | None = Field(
        default=None,
        description="Unique identification code of the transport package.",
    )


class Document(BaseModel):
    """Goods introduction document submitted to the registry."""

    model_config = ConfigDict(populate_by_name=True)

    description: Description | None = None
    doc_id: str | None = None
    doc_status: str | None = None
    doc_type: str | None = None
    import_request: bool = Field(default=False, alias="importRequest")
    owner_inn: str | None = None
    participant_inn: str | None = None
    producer_inn: str | None = None
    production_date: str | None = None
    production_type: str | None = None
    products: list[Product] | None = None
    reg_date: str | None = None
    reg_number: str | None = None

    def to_json_bytes(self) -> bytes:
        """Serialize with registry field names, nulls included, pretty-printed."""

        return self.model_dump_json(by_alias=True, indent=2).encode("utf-8")
