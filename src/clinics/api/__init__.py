from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..core.registry import ClinicRegistry
from .routes import mount_clinics_api


def create_api_app(registry: ClinicRegistry | None = None) -> FastAPI:
    """Create the HTTP app over `registry` (a fresh, empty one when omitted)."""

    if registry is None:
        registry = ClinicRegistry()

    app = FastAPI(title="clinics", version="0.1.0")
    app.state.registry = registry

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    mount_clinics_api(app, registry)

    @app.get("/healthz")
    def healthz() -> dict[str, bool]:
        return {"ok": True}

    @app.get("/api/events")
    def events() -> dict[str, int]:
        # Minimal polling endpoint: clients re-fetch when the revision moves.
        return {"revision": registry.revision()}

    @app.post("/api/reset")
    def reset_registry() -> dict[str, bool]:
        registry.reset()
        return {"ok": True}

    return app


# Alias used by the runtime and by `uvicorn --factory clinics.api:create_app`.
create_app = create_api_app
