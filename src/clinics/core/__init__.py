from __future__ import annotations

from .clinic import Clinic
from .registry import ClinicRegistry

__all__ = [
    "Clinic",
    "ClinicRegistry",
]
