"""
Models package for the courier records service
"""
from courier.database import Base
from courier.models.user_models import User, ROLE_ADMIN, ROLE_USER, ROLES
from courier.models.record_models import (
    Pickup,
    Delivery,
    ManualStats,
    DELIVERY_STATUSES,
    STATUS_DELIVERED,
    STATUS_FAILED,
    STATUS_IN_PROGRESS,
)

__all__ = [
    "Base",
    "User",
    "ROLE_ADMIN",
    "ROLE_USER",
    "ROLES",
    "Pickup",
    "Delivery",
    "ManualStats",
    "DELIVERY_STATUSES",
    "STATUS_DELIVERED",
    "STATUS_FAILED",
    "STATUS_IN_PROGRESS",
]
