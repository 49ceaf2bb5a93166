"""
Pydantic models for cart payloads.

The cart itself is returned as a list of ``ServiceOffering`` objects;
only the add request needs its own schema.
"""

from pydantic import BaseModel, Field


class CartAdd(BaseModel):
    serviceId: int = Field(..., example=3, description="ID of the catalog service to add")
