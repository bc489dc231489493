from __future__ import annotations

from .server import ClinicsServer, run

__all__ = ["ClinicsServer", "run"]
