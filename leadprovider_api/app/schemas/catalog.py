"""Pydantic model for the service offerings sold by the agency."""

from pydantic import BaseModel, Field


class ServiceOffering(BaseModel):
    id: int = Field(..., example=1)
    title: str = Field(..., example="Data Appending Enrichment")
    description: str = Field("", example="We enrich your lead list with missing contact data.")
    image: str = Field("", example="/images/services/service-1.png")

    model_config = {
        "from_attributes": True,
        "frozen": True,
    }
