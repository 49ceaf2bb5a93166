"""
Order endpoints for the authenticated user.

``POST`` checks out either the item list sent by the client (the
front-end keeps its cart locally) or, when no list is sent, the cart
stored on the server.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, status

from leadprovider_api.app.core.security import get_session
from leadprovider_api.app.schemas.order import CheckoutRequest, CheckoutResponse, OrderRead
from leadprovider_api.app.schemas.user import SessionContext
from leadprovider_api.app.services.order_service import OrderService


router = APIRouter()


@router.get("", response_model=List[OrderRead])
async def list_my_orders(current: SessionContext = Depends(get_session)) -> List[OrderRead]:
    """Own orders with their items, newest first."""
    return await OrderService.list_for_user(current.user_id)


@router.post("", response_model=CheckoutResponse, status_code=status.HTTP_201_CREATED)
async def place_order(
    body: Optional[CheckoutRequest] = None,
    current: SessionContext = Depends(get_session),
) -> CheckoutResponse:
    """Place an order.  Responds 400 when there is nothing to order."""
    service_ids = None
    if body is not None and body.items is not None:
        service_ids = [item.id for item in body.items]
    order_id = await OrderService.checkout(current.user_id, service_ids)
    return CheckoutResponse(orderId=order_id)
