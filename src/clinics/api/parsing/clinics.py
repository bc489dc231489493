from __future__ import annotations

from typing import Any

from ...core.clinic import Clinic

CLINIC_FIELDS = ("id", "name", "city", "specialty")
MUTABLE_FIELDS = ("name", "city", "specialty")


def _require_str(body: dict[str, Any], key: str) -> str:
    value = body.get(key)
    if not isinstance(value, str):
        raise ValueError(f"{key} must be a string")
    return value


def parse_clinic_body(body: Any) -> Clinic:
    """Build a Clinic from a JSON object with all four fields.

    Raises ValueError on a missing field, a non-string field, or a blank id.
    """
    if not isinstance(body, dict):
        raise ValueError("Request body must be a JSON object")
    missing = [k for k in CLINIC_FIELDS if k not in body]
    if missing:
        raise ValueError(f"Missing field(s): {', '.join(missing)}")
    values = {k: _require_str(body, k) for k in CLINIC_FIELDS}
    if not values["id"].strip():
        raise ValueError("id cannot be empty")
    return Clinic(**values)


def parse_patch_body(body: Any) -> dict[str, str]:
    if not isinstance(body, dict):
        raise ValueError("Request body must be a JSON object")
    if "id" in body:
        raise ValueError("id cannot be changed")
    unknown = sorted(k for k in body if k not in MUTABLE_FIELDS)
    if unknown:
        raise ValueError(f"Unknown field(s): {', '.join(unknown)}")
    return {k: _require_str(body, k) for k in MUTABLE_FIELDS if k in body}
