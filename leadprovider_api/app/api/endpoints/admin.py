"""
Admin review endpoints.

Administrators see the orders of every user and approve or reject
them.  Every route is behind ``require_admin``, which answers 403 to any
caller without the admin role.
"""

from typing import List

from fastapi import APIRouter, Depends, Path

from leadprovider_api.app.core.security import require_admin
from leadprovider_api.app.schemas.order import AdminOrderRead, OrderStatusResponse, OrderStatusUpdate
from leadprovider_api.app.schemas.user import SessionContext
from leadprovider_api.app.services.order_service import OrderService


router = APIRouter()


@router.get("/orders", response_model=List[AdminOrderRead])
async def list_all_orders(current: SessionContext = Depends(require_admin)) -> List[AdminOrderRead]:
    """All orders with the owner's email, newest first."""
    return await OrderService.list_all()


@router.put("/orders/{order_id}", response_model=OrderStatusResponse)
async def update_order_status(
    body: OrderStatusUpdate,
    order_id: int = Path(..., description="ID of the order"),
    current: SessionContext = Depends(require_admin),
) -> OrderStatusResponse:
    """Approve or reject an order.

    Responds 400 for a status other than ``approved``/``rejected``, 404
    for an unknown order and, under the strict status policy, 409 when
    the order was already reviewed.
    """
    order = await OrderService.update_status(order_id, body.status)
    return OrderStatusResponse(order=order)
