"""Liveness probe used by the hosting platform."""

from typing import Dict

from fastapi import APIRouter


router = APIRouter()


@router.get("/health")
async def health() -> Dict[str, str]:
    return {"status": "ok"}
