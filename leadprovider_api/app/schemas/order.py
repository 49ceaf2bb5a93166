"""
Pydantic models for orders.

Order items carry a snapshot of the catalog title and image taken at
checkout, so they keep displaying what was bought even if the catalog
changes later.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


STATUS_PENDING = "pending"
STATUS_APPROVED = "approved"
STATUS_REJECTED = "rejected"
# Statuses an administrator may assign.
REVIEW_STATUSES = (STATUS_APPROVED, STATUS_REJECTED)


class OrderItemRead(BaseModel):
    id: int
    order_id: int
    service_id: int
    service_title: str
    service_image: Optional[str] = None

    model_config = {
        "from_attributes": True,
    }


class OrderRead(BaseModel):
    id: int
    user_id: int
    status: str = Field(STATUS_PENDING, example=STATUS_PENDING)
    created_at: str
    items: List[OrderItemRead] = Field(default_factory=list)

    model_config = {
        "from_attributes": True,
    }


class AdminOrderRead(OrderRead):
    """Order as shown in the admin review list, with the owner's email."""

    user_email: str = Field(..., example="user@example.com")


class CheckoutItem(BaseModel):
    """A client-held cart entry.  Only the service ``id`` is used."""

    id: int = Field(..., example=1)
    title: Optional[str] = None

    model_config = {
        "extra": "ignore",
    }


class CheckoutRequest(BaseModel):
    """Body of ``POST /orders``.

    When ``items`` is omitted the server-side cart is checked out.
    """

    items: Optional[List[CheckoutItem]] = None


class CheckoutResponse(BaseModel):
    message: str = Field("Order placed successfully")
    orderId: int


class OrderStatusUpdate(BaseModel):
    # Left as a plain string so unknown values are rejected by the
    # service with a 400 instead of by schema validation.
    status: Optional[str] = Field(None, example=STATUS_APPROVED)


class OrderStatusResponse(BaseModel):
    message: str = Field("Order status updated")
    order: OrderRead
