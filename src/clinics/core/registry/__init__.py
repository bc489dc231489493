from __future__ import annotations

from .service import ClinicRegistry

__all__ = ["ClinicRegistry"]
