from __future__ import annotations

import os

import pytest

import clinics
from clinics.core.clinic import Clinic
from clinics.runtime.server import ClinicsServer
from clinics.sdk.client import ClinicsClient


@pytest.fixture(scope="module")
def server() -> ClinicsServer:
    srv = clinics.run(host="127.0.0.1", port=0, log_level="warning", new_server=True)
    assert isinstance(srv, ClinicsServer)
    return srv


def test_client_round_trip_against_live_server(server: ClinicsServer) -> None:
    client = server.client()
    client.reset()

    assert client.add_clinic(Clinic("C001", "Alpha Clinic", "Warsaw", "Dermatology")) is True
    assert client.add_clinic(Clinic("C002", "Beta Clinic", "Krakow", "Cardiology")) is True
    assert client.add_clinic(Clinic("C001", "Impostor", "Lodz", "Neurology")) is False

    assert {c.id for c in client.search_by_city("warsaw")} == {"C001"}
    assert {c.id for c in client.get_by_specialty("Cardiology")} == {"C002"}

    assert client.update_specialty("C002", "Neurology") is True
    assert client.update_specialty("C999", "Neurology") is False
    assert client.list_specialties() == {"Dermatology": 1, "Neurology": 1}

    assert client.update_details("C001", name="Alpha Plus") is True
    fetched = client.get_clinic("C001")
    assert fetched is not None
    assert fetched.name == "Alpha Plus"
    assert client.get_clinic("C999") is None

    assert client.remove_clinic("C001") is True
    assert client.remove_clinic("C001") is False
    assert [c.id for c in client.list_clinics()] == ["C002"]

    # HTTP writes land in the registry the server object exposes.
    assert server.registry.get("C002") is not None
    server.registry.check_invariants()


def test_in_process_shortcuts_share_the_served_registry(server: ClinicsServer) -> None:
    server.client().reset()
    assert server.add_clinic(Clinic("D1", "Delta", "Gdansk", "Pediatrics")) is True
    assert server.update_specialty("D1", "Dermatology") is True
    assert {c.id for c in server.get_by_specialty("Dermatology")} == {"D1"}
    assert {c.id for c in server.search_by_city("GDANSK")} == {"D1"}

    rev = server.client().revision()
    assert server.remove_clinic("D1") is True
    assert server.client().revision() > rev
    assert server.client().list_clinics() == []


def test_run_attaches_to_existing_server(server: ClinicsServer) -> None:
    attached = clinics.run(host=server.host, port=server.port)
    assert isinstance(attached, ClinicsClient)
    assert attached.base_url == f"http://{server.host}:{server.port}"


def test_run_new_server_ignores_env_url(server: ClinicsServer) -> None:
    os.environ["CLINICS_URL"] = f"{server.host}:{server.port}"
    try:
        attached = clinics.run(host="127.0.0.1", port=0)
        assert isinstance(attached, ClinicsClient)

        fresh = clinics.run(host="127.0.0.1", port=0, log_level="warning", new_server=True)
    finally:
        os.environ.pop("CLINICS_URL", None)

    assert isinstance(fresh, ClinicsServer)
    assert fresh.port != server.port
    assert fresh.registry is not server.registry


def test_client_handles_reserved_characters(server: ClinicsServer) -> None:
    client = server.client()
    client.reset()

    assert client.add_clinic(Clinic("E1", "Odd", "Opole", "ENT?")) is True
    assert client.add_clinic(Clinic("E2", "Plain", "Opole", "ENT")) is True
    assert client.add_clinic(Clinic("E3", "Slash", "Opole", "Ear/Nose")) is True
    assert client.add_clinic(Clinic("A/1", "Slash id", "Opole", "Ear#Nose 100%")) is True

    assert {c.id for c in client.get_by_specialty("ENT?")} == {"E1"}
    assert {c.id for c in client.get_by_specialty("ENT")} == {"E2"}
    assert {c.id for c in client.get_by_specialty("Ear/Nose")} == {"E3"}
    assert {c.id for c in client.get_by_specialty("Ear#Nose 100%")} == {"A/1"}
    assert client.get_by_specialty("Ear/Throat") == set()

    fetched = client.get_clinic("A/1")
    assert fetched is not None
    assert fetched.name == "Slash id"
    assert client.update_specialty("A/1", "ENT?") is True
    assert {c.id for c in client.get_by_specialty("ENT?")} == {"E1", "A/1"}
    assert client.update_clinic("A/1", name="Renamed", city="Lodz", specialty="ENT") is True
    renamed = server.registry.get("A/1")
    assert renamed is not None
    assert (renamed.name, renamed.city, renamed.specialty) == ("Renamed", "Lodz", "ENT")
    assert client.remove_clinic("A/1") is True
    assert client.remove_clinic("A/1") is False
    assert client.get_clinic("E1?") is None
    server.registry.check_invariants()
