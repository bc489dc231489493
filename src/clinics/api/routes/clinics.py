from __future__ import annotations

from typing import Any

from fastapi import FastAPI, HTTPException

from ...core.registry import ClinicRegistry
from ..parsing import parse_clinic_body, parse_patch_body
from ..serializers import clinic_to_item, clinics_to_items


def mount_clinics_api(app: FastAPI, registry: ClinicRegistry) -> None:
    """Mount clinic and specialty endpoints backed by `registry`.

    Ids and specialties are free text, so path parameters use the `path`
    converter: clients percent-encode the whole value (including `/`) and
    Starlette hands it back decoded.
    """

    @app.get("/api/clinics")
    def list_clinics(city: str | None = None, specialty: str | None = None) -> list[dict[str, Any]]:
        if city is not None and specialty is not None:
            raise HTTPException(status_code=400, detail="Filter by city or specialty, not both")
        if city is not None:
            return clinics_to_items(registry.search_by_city(city))
        if specialty is not None:
            # Query form also reaches the empty specialty, which no path can.
            return clinics_to_items(registry.get_by_specialty(specialty))
        return clinics_to_items(registry.list_clinics())

    @app.post("/api/clinics", status_code=201)
    def add_clinic(body: dict) -> dict[str, Any]:
        try:
            clinic = parse_clinic_body(body)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        if not registry.insert(clinic):
            raise HTTPException(status_code=409, detail=f"Duplicate clinic id: {clinic.id}")
        return {"ok": True, **clinic_to_item(clinic)}

    @app.get("/api/clinics/{clinic_id:path}")
    def get_clinic(clinic_id: str) -> dict[str, Any]:
        c = registry.get(clinic_id)
        if c is None:
            raise HTTPException(status_code=404, detail=f"Unknown clinic: {clinic_id}")
        return clinic_to_item(c)

    @app.patch("/api/clinics/{clinic_id:path}")
    def update_clinic(clinic_id: str, body: dict) -> dict[str, Any]:
        try:
            fields = parse_patch_body(body)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))

        if not registry.update_clinic(clinic_id, **fields):
            raise HTTPException(status_code=404, detail=f"Unknown clinic: {clinic_id}")
        c = registry.get(clinic_id)
        if c is None:
            # Removed by another request right after the update.
            raise HTTPException(status_code=404, detail=f"Unknown clinic: {clinic_id}")
        return {"ok": True, **clinic_to_item(c)}

    @app.delete("/api/clinics/{clinic_id:path}")
    def delete_clinic(clinic_id: str) -> dict[str, bool]:
        if not registry.remove_by_id(clinic_id):
            raise HTTPException(status_code=404, detail=f"Unknown clinic: {clinic_id}")
        return {"ok": True}

    @app.get("/api/specialties")
    def list_specialties() -> dict[str, int]:
        counts = registry.specialty_counts()
        return {k: counts[k] for k in sorted(counts)}

    @app.get("/api/specialties/{specialty:path}")
    def get_by_specialty(specialty: str) -> list[dict[str, Any]]:
        # Unknown specialties are just empty buckets.
        return clinics_to_items(registry.get_by_specialty(specialty))
