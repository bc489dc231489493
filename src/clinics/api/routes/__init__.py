from __future__ import annotations

from .clinics import mount_clinics_api

__all__ = ["mount_clinics_api"]
