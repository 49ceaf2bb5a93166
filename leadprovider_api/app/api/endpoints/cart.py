"""
Cart endpoints.

Every route returns the cart as it stands after the request, so the
client can replace its local copy with the response.
"""

from typing import List

from fastapi import APIRouter, Depends, Path, status

from leadprovider_api.app.core.security import get_session
from leadprovider_api.app.schemas.cart import CartAdd
from leadprovider_api.app.schemas.catalog import ServiceOffering
from leadprovider_api.app.schemas.user import SessionContext
from leadprovider_api.app.services.cart_service import CartService


router = APIRouter()


@router.get("", response_model=List[ServiceOffering])
async def get_cart(current: SessionContext = Depends(get_session)) -> List[ServiceOffering]:
    return await CartService.list(current.user_id)


@router.post("", response_model=List[ServiceOffering], status_code=status.HTTP_201_CREATED)
async def add_to_cart(body: CartAdd, current: SessionContext = Depends(get_session)) -> List[ServiceOffering]:
    """Add a service to the cart.  Adding it twice keeps a single entry."""
    return await CartService.add(current.user_id, body.serviceId)


@router.delete("/{service_id}", response_model=List[ServiceOffering])
async def remove_from_cart(
    service_id: int = Path(..., description="ID of the catalog service"),
    current: SessionContext = Depends(get_session),
) -> List[ServiceOffering]:
    return await CartService.remove(current.user_id, service_id)
