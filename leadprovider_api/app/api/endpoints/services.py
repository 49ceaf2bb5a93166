"""Public catalog of service offerings."""

from typing import List

from fastapi import APIRouter

from leadprovider_api.app.schemas.catalog import ServiceOffering
from leadprovider_api.app.services.catalog_service import CatalogService


router = APIRouter()


@router.get("", response_model=List[ServiceOffering])
async def list_services() -> List[ServiceOffering]:
    return CatalogService.list_services()
