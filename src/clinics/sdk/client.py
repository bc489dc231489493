from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx

from ..core.clinic import Clinic


def _segment(value: str) -> str:
    # Ids and specialties are free text; "/", "?", "#" and "%" must stay inside one segment.
    return quote(value, safe="")


def _clinic_from_item(item: dict[str, Any]) -> Clinic:
    return Clinic(
        id=str(item["id"]),
        name=str(item["name"]),
        city=str(item["city"]),
        specialty=str(item["specialty"]),
    )


class ClinicsClient:
    """HTTP client for a running clinics server.

    Calls that report success as a bool map 404 (unknown id) and 409 (duplicate id)
    to False. Any other error status raises RuntimeError.
    """

    def __init__(self, base_url: str = "http://127.0.0.1:8000") -> None:
        self.base_url = base_url.rstrip("/")

    def _client(self, timeout_s: float) -> httpx.Client:
        return httpx.Client(base_url=self.base_url, timeout=timeout_s)

    def add_clinic(self, clinic: Clinic, *, timeout_s: float = 10.0) -> bool:
        body = {"id": clinic.id, "name": clinic.name, "city": clinic.city, "specialty": clinic.specialty}
        with self._client(timeout_s) as client:
            res = client.post("/api/clinics", json=body)
            if res.status_code == 409:
                return False
            if res.status_code >= 400:
                raise RuntimeError(f"Failed to add clinic: {res.status_code} {res.text}")
            return True

    def get_clinic(self, clinic_id: str, *, timeout_s: float = 10.0) -> Clinic | None:
        with self._client(timeout_s) as client:
            res = client.get(f"/api/clinics/{_segment(clinic_id)}")
            if res.status_code == 404:
                return None
            if res.status_code >= 400:
                raise RuntimeError(f"Failed to get clinic: {res.status_code} {res.text}")
            return _clinic_from_item(res.json())

    def remove_clinic(self, clinic_id: str, *, timeout_s: float = 10.0) -> bool:
        with self._client(timeout_s) as client:
            res = client.delete(f"/api/clinics/{_segment(clinic_id)}")
            if res.status_code == 404:
                return False
            if res.status_code >= 400:
                raise RuntimeError(f"Failed to remove clinic: {res.status_code} {res.text}")
            return True

    def _patch(self, clinic_id: str, body: dict[str, str], *, timeout_s: float) -> bool:
        with self._client(timeout_s) as client:
            res = client.patch(f"/api/clinics/{_segment(clinic_id)}", json=body)
            if res.status_code == 404:
                return False
            if res.status_code >= 400:
                raise RuntimeError(f"Failed to update clinic: {res.status_code} {res.text}")
            return True

    def update_specialty(self, clinic_id: str, specialty: str, *, timeout_s: float = 10.0) -> bool:
        return self._patch(clinic_id, {"specialty": specialty}, timeout_s=timeout_s)

    def update_details(
        self,
        clinic_id: str,
        *,
        name: str | None = None,
        city: str | None = None,
        timeout_s: float = 10.0,
    ) -> bool:
        return self.update_clinic(clinic_id, name=name, city=city, timeout_s=timeout_s)

    def update_clinic(
        self,
        clinic_id: str,
        *,
        name: str | None = None,
        city: str | None = None,
        specialty: str | None = None,
        timeout_s: float = 10.0,
    ) -> bool:
        """Apply the given fields in a single request; the server updates them atomically."""
        body: dict[str, str] = {}
        if name is not None:
            body["name"] = name
        if city is not None:
            body["city"] = city
        if specialty is not None:
            body["specialty"] = specialty
        return self._patch(clinic_id, body, timeout_s=timeout_s)

    def _get_clinics(self, path: str, params: dict[str, str] | None, *, timeout_s: float) -> list[Clinic]:
        with self._client(timeout_s) as client:
            res = client.get(path, params=params)
            if res.status_code >= 400:
                raise RuntimeError(f"Failed to list clinics: {res.status_code} {res.text}")
            return [_clinic_from_item(item) for item in res.json()]

    def list_clinics(self, *, timeout_s: float = 10.0) -> list[Clinic]:
        return self._get_clinics("/api/clinics", None, timeout_s=timeout_s)

    def search_by_city(self, city: str, *, timeout_s: float = 10.0) -> set[Clinic]:
        return set(self._get_clinics("/api/clinics", {"city": city}, timeout_s=timeout_s))

    def get_by_specialty(self, specialty: str, *, timeout_s: float = 10.0) -> set[Clinic]:
        # Query form so the empty specialty is reachable too.
        return set(self._get_clinics("/api/clinics", {"specialty": specialty}, timeout_s=timeout_s))

    def list_specialties(self, *, timeout_s: float = 10.0) -> dict[str, int]:
        with self._client(timeout_s) as client:
            res = client.get("/api/specialties")
            if res.status_code >= 400:
                raise RuntimeError(f"Failed to list specialties: {res.status_code} {res.text}")
            return {str(k): int(v) for k, v in res.json().items()}

    def revision(self, *, timeout_s: float = 10.0) -> int:
        with self._client(timeout_s) as client:
            res = client.get("/api/events")
            if res.status_code >= 400:
                raise RuntimeError(f"Failed to get events: {res.status_code} {res.text}")
            return int(res.json()["revision"])

    def reset(self, *, timeout_s: float = 10.0) -> None:
        with self._client(timeout_s) as client:
            res = client.post("/api/reset")
            if res.status_code >= 400:
                raise RuntimeError(f"Failed to reset registry: {res.status_code} {res.text}")
