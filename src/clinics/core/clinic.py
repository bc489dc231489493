from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any


@dataclass(eq=False)
class Clinic:
    """A clinic record.

    Notes:
    - Identity is the `id` alone: two clinics with the same id compare equal and
      hash the same regardless of their other fields.
    - `id` cannot be reassigned once set.
    - Once a clinic is inside a `ClinicRegistry`, change its specialty only through
      `ClinicRegistry.update_specialty` so the specialty index stays in sync.
    """

    id: str
    name: str
    city: str
    specialty: str

    def __setattr__(self, key: str, value: Any) -> None:
        if key == "id" and "id" in self.__dict__:
            raise AttributeError("Clinic.id is immutable")
        super().__setattr__(key, value)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Clinic):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def copy(self) -> Clinic:
        return replace(self)
