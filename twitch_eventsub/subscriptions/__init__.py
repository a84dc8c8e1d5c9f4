from .catalog import (
    CATALOG,
    AnyKind,
    CatalogEntry,
    CustomSubscription,
    SubscriptionKind,
    lookup,
    scopes_for,
)
from .condition import AccountIds, build_condition, build_subscription
from .models import Condition, EventSubscription, Transport

__all__ = [
    "CATALOG",
    "AnyKind",
    "CatalogEntry",
    "CustomSubscription",
    "SubscriptionKind",
    "lookup",
    "scopes_for",
    "AccountIds",
    "build_condition",
    "build_subscription",
    "Condition",
    "EventSubscription",
    "Transport",
]
