"""Models package - Import all models for SQLAlchemy registration."""
from mototrip.models.user import User
from mototrip.models.trip import Trip, TripMember, TripMemberRole
from mototrip.models.stage import Stage
from mototrip.models.item import Item, ItemType
from mototrip.models.expense import Expense, ExpenseShare
from mototrip.models.fuel_entry import FuelEntry
from mototrip.models.accommodation_entry import AccommodationEntry
from mototrip.models.service_entry import ServiceEntry
from mototrip.models.attachment import Attachment

__all__ = [
    "User",
    "Trip",
    "TripMember",
    "TripMemberRole",
    "Stage",
    "Item",
    "ItemType",
    "Expense",
    "ExpenseShare",
    "FuelEntry",
    "AccommodationEntry",
    "ServiceEntry",
    "Attachment",
]
