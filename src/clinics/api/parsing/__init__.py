from __future__ import annotations

from .clinics import parse_clinic_body, parse_patch_body

__all__ = [
    "parse_clinic_body",
    "parse_patch_body",
]
