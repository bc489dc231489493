from __future__ import annotations

from .clinics import clinic_to_item, clinics_to_items

__all__ = [
    "clinic_to_item",
    "clinics_to_items",
]
