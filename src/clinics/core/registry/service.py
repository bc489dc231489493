from __future__ import annotations

import logging
import threading

from ..clinic import Clinic

logger = logging.getLogger(__name__)


class ClinicRegistry:
    """In-memory clinic store with a specialty index.

    Clinics are keyed by id. `_by_specialty` maps each specialty to the set of
    clinics currently holding it and is updated by every mutating call; a
    bucket is dropped as soon as it becomes empty.

    Everything handed back to callers is a detached copy, so editing a returned
    clinic never reaches the stored one.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._clinics: dict[str, Clinic] = {}
        self._by_specialty: dict[str, set[Clinic]] = {}
        self._revision = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._clinics)

    def __contains__(self, clinic_id: object) -> bool:
        with self._lock:
            return clinic_id in self._clinics

    def revision(self) -> int:
        with self._lock:
            return self._revision

    def _index_locked(self, clinic: Clinic) -> None:
        self._by_specialty.setdefault(clinic.specialty, set()).add(clinic)

    def _unindex_locked(self, clinic: Clinic) -> None:
        bucket = self._by_specialty.get(clinic.specialty)
        if bucket is None:
            return
        bucket.discard(clinic)
        if not bucket:
            del self._by_specialty[clinic.specialty]

    def insert(self, clinic: Clinic) -> bool:
        """Add `clinic` unless its id is taken. An existing record is never overwritten."""
        with self._lock:
            if clinic.id in self._clinics:
                logger.debug("Rejected duplicate clinic id %r", clinic.id)
                return False
            stored = clinic.copy()
            self._clinics[stored.id] = stored
            self._index_locked(stored)
            self._revision += 1
            logger.debug("Inserted clinic %r (specialty=%r)", stored.id, stored.specialty)
            return True

    def remove_by_id(self, clinic_id: str) -> bool:
        with self._lock:
            found = self._clinics.pop(clinic_id, None)
            if found is None:
                return False
            self._unindex_locked(found)
            self._revision += 1
            logger.debug("Removed clinic %r", clinic_id)
            return True

    def _set_specialty_locked(self, found: Clinic, specialty: str) -> bool:
        if found.specialty == specialty:
            return False
        old = found.specialty
        self._unindex_locked(found)
        found.specialty = specialty
        self._index_locked(found)
        logger.debug("Clinic %r specialty %r -> %r", found.id, old, specialty)
        return True

    def update_specialty(self, clinic_id: str, specialty: str) -> bool:
        """Move a clinic to another specialty bucket.

        Returns False for an unknown id. Setting the current specialty again is a
        no-op that still returns True.
        """
        return self.update_clinic(clinic_id, specialty=specialty)

    def update_details(self, clinic_id: str, *, name: str | None = None, city: str | None = None) -> bool:
        return self.update_clinic(clinic_id, name=name, city=city)

    def update_clinic(
        self,
        clinic_id: str,
        *,
        name: str | None = None,
        city: str | None = None,
        specialty: str | None = None,
    ) -> bool:
        """Apply any of name/city/specialty in one step. Fields left as None are kept."""
        with self._lock:
            found = self._clinics.get(clinic_id)
            if found is None:
                return False
            changed = False
            if name is not None and name != found.name:
                found.name = name
                changed = True
            if city is not None and city != found.city:
                found.city = city
                changed = True
            if changed:
                logger.debug("Updated clinic %r (name=%r, city=%r)", clinic_id, found.name, found.city)
            if specialty is not None and self._set_specialty_locked(found, specialty):
                changed = True
            if changed:
                self._revision += 1
            return True

    def get(self, clinic_id: str) -> Clinic | None:
        with self._lock:
            found = self._clinics.get(clinic_id)
            return found.copy() if found is not None else None

    def get_by_specialty(self, specialty: str) -> frozenset[Clinic]:
        with self._lock:
            bucket = self._by_specialty.get(specialty)
            if bucket is None:
                return frozenset()
            return frozenset(c.copy() for c in bucket)

    def search_by_city(self, city: str) -> frozenset[Clinic]:
        # Unindexed on purpose: full scan.
        needle = city.casefold()
        with self._lock:
            return frozenset(c.copy() for c in self._clinics.values() if c.city.casefold() == needle)

    def list_clinics(self) -> list[Clinic]:
        with self._lock:
            return [c.copy() for c in self._clinics.values()]

    def list_specialties(self) -> list[str]:
        with self._lock:
            return list(self._by_specialty)

    def specialty_counts(self) -> dict[str, int]:
        with self._lock:
            return {k: len(v) for k, v in self._by_specialty.items()}

    def reset(self) -> None:
        with self._lock:
            dropped = len(self._clinics)
            self._clinics.clear()
            self._by_specialty.clear()
            self._revision += 1
            logger.debug("Reset registry (%d clinics dropped)", dropped)

    def check_invariants(self) -> None:
        """Raise AssertionError if the specialty index disagrees with the stored clinics."""
        with self._lock:
            indexed = 0
            for specialty, bucket in self._by_specialty.items():
                if not bucket:
                    raise AssertionError(f"empty bucket for specialty {specialty!r}")
                for c in bucket:
                    if self._clinics.get(c.id) is not c:
                        raise AssertionError(f"indexed clinic {c.id!r} is not stored")
                    if c.specialty != specialty:
                        raise AssertionError(f"clinic {c.id!r} indexed under {specialty!r}, holds {c.specialty!r}")
                indexed += len(bucket)
            if indexed != len(self._clinics):
                raise AssertionError("every stored clinic must sit in exactly one bucket")
            for clinic_id, c in self._clinics.items():
                if c.id != clinic_id:
                    raise AssertionError(f"clinic stored under {clinic_id!r} reports id {c.id!r}")
