"""Routers package."""

from .recurring_rules import router as recurring_rules_router

__all__ = ["recurring_rules_router"]
