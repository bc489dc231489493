from __future__ import annotations

from .core.clinic import Clinic
from .core.registry import ClinicRegistry
from .runtime.server import ClinicsServer, run
from .sdk.client import ClinicsClient

__all__ = [
    "Clinic",
    "ClinicRegistry",
    "ClinicsClient",
    "ClinicsServer",
    "run",
]
