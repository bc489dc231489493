from __future__ import annotations

from .client import ClinicsClient

__all__ = ["ClinicsClient"]
