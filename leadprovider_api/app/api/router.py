"""
Top‑level API router.

This router aggregates the domain routers (auth, catalog, cart, orders,
admin review and health) and is mounted under ``/api`` by
``create_app``.  When a new domain is introduced, include its router
here.
"""

from fastapi import APIRouter

from .endpoints import admin, auth, cart, health, orders, services

router = APIRouter()

# Auth routes sit directly under /api (/api/register, /api/login, /api/session)
router.include_router(auth.router, tags=["auth"])
router.include_router(services.router, prefix="/services", tags=["services"])
router.include_router(cart.router, prefix="/cart", tags=["cart"])
router.include_router(orders.router, prefix="/orders", tags=["orders"])
router.include_router(admin.router, prefix="/admin", tags=["admin"])
router.include_router(health.router, tags=["health"])
