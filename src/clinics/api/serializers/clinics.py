from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from ...core.clinic import Clinic


def clinic_to_item(c: Clinic) -> dict[str, Any]:
    return {
        "id": c.id,
        "name": c.name,
        "city": c.city,
        "specialty": c.specialty,
    }


def clinics_to_items(clinics: Iterable[Clinic]) -> list[dict[str, Any]]:
    # Sort so responses are stable regardless of set ordering.
    return [clinic_to_item(c) for c in sorted(clinics, key=lambda c: c.id)]
