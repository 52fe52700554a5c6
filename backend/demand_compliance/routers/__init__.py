"""Demand Compliance - API Routers"""
from .compliance import router as compliance_router

__all__ = [
    "compliance_router",
]
