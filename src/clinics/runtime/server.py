from __future__ import annotations

import contextlib
import os
import socket
import threading
import time
from dataclasses import dataclass, field

import uvicorn

from ..api import create_app
from ..core.clinic import Clinic
from ..core.registry import ClinicRegistry
from ..sdk.client import ClinicsClient


@dataclass(frozen=True)
class ClinicsServer:
    host: str
    port: int
    url: str
    registry: ClinicRegistry = field(default_factory=ClinicRegistry, repr=False, compare=False)

    def client(self) -> ClinicsClient:
        """HTTP client pointed at this server."""
        return ClinicsClient(self.url.rstrip("/"))

    # In-process shortcuts; no HTTP round trip.

    def add_clinic(self, clinic: Clinic) -> bool:
        return self.registry.insert(clinic)

    def remove_clinic(self, clinic_id: str) -> bool:
        return self.registry.remove_by_id(clinic_id)

    def update_specialty(self, clinic_id: str, specialty: str) -> bool:
        return self.registry.update_specialty(clinic_id, specialty)

    def get_by_specialty(self, specialty: str) -> frozenset[Clinic]:
        return self.registry.get_by_specialty(specialty)

    def search_by_city(self, city: str) -> frozenset[Clinic]:
        return self.registry.search_by_city(city)


def _find_free_port(host: str) -> int:
    with contextlib.closing(socket.socket(socket.AF_INET, socket.SOCK_STREAM)) as s:
        s.bind((host, 0))
        return int(s.getsockname()[1])


def _normalize_base_url(url: str) -> str:
    url = url.strip()
    if not url:
        return ""
    # Allow passing just host:port.
    if "://" not in url:
        url = "http://" + url
    return url.rstrip("/")


def _is_server_alive(base_url: str, *, timeout_s: float = 0.2) -> bool:
    """Best-effort probe to determine if a clinics server is reachable."""

    import httpx

    try:
        with httpx.Client(base_url=base_url, timeout=timeout_s) as client:
            r = client.get("/healthz")
            if r.status_code != 200:
                return False
            data = r.json()
            return bool(data.get("ok"))
    except (httpx.HTTPError, ValueError):
        return False


def run(
    *,
    host: str = "127.0.0.1",
    port: int = 0,
    log_level: str = "info",
    access_log: bool = False,
    new_server: bool = False,
    connect_timeout_s: float = 0.2,
    startup_timeout_s: float = 5.0,
    registry: ClinicRegistry | None = None,
) -> ClinicsServer | ClinicsClient:
    """Start a clinics server in a background thread, or attach to a running one.

    Behavior:
    - If CLINICS_URL is set and reachable, return a `ClinicsClient` for it unless
      `new_server=True`.
    - Otherwise, if `port != 0` and a server already answers on http://{host}:{port},
      attach to it the same way unless `new_server=True`.
    - Otherwise start uvicorn on a daemon thread and return a `ClinicsServer`
      wrapping the registry it serves.

    Notes:
    - `port=0` means "pick a free port", so there's nothing to attach to.
    - `registry` lets the caller share a registry with the server; a fresh one is
      created when omitted.
    """

    env_url = _normalize_base_url(os.getenv("CLINICS_URL", ""))

    # 1) Try attaching to an explicitly provided server.
    if env_url and not new_server:
        if _is_server_alive(env_url, timeout_s=connect_timeout_s):
            return ClinicsClient(env_url)

    # 2) Try attaching to host/port if they are explicitly chosen.
    if port != 0 and not new_server:
        default_url = _normalize_base_url(f"http://{host}:{port}")
        if _is_server_alive(default_url, timeout_s=connect_timeout_s):
            return ClinicsClient(default_url)

    # 3) Start a fresh server.
    if port == 0:
        port = _find_free_port(host)

    if registry is None:
        registry = ClinicRegistry()
    app = create_app(registry)

    config = uvicorn.Config(app, host=host, port=port, log_level=log_level, access_log=access_log)
    server = uvicorn.Server(config)

    thread = threading.Thread(target=server.run, daemon=True)
    thread.start()

    deadline = time.monotonic() + startup_timeout_s
    while not server.started:
        if not thread.is_alive():
            raise RuntimeError(f"clinics server failed to start on {host}:{port}")
        if time.monotonic() > deadline:
            raise RuntimeError(f"Timed out waiting for clinics server on {host}:{port}")
        time.sleep(0.01)

    url = f"http://{host}:{port}/"
    return ClinicsServer(host=host, port=port, url=url, registry=registry)
