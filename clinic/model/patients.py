from collections.abc import Iterable, Iterator

from clinic.domain.exceptions import DuplicatePatientError, PatientNotFoundError
from clinic.domain.models import Patient


class UniquePatientList:
    """Ordered list of patients in which no two patients share an NRIC.

    Replacing a patient keeps its position in the list.
    """

    def __init__(self) -> None:
        self._patients: list[Patient] = []

    def has_nric(self, nric: str) -> bool:
        return any(p.nric == nric for p in self._patients)

    def contains(self, patient: Patient) -> bool:
        return any(p.is_same_patient(patient) for p in self._patients)

    def get_by_nric(self, nric: str) -> Patient:
        for patient in self._patients:
            if patient.nric == nric:
                return patient
        raise PatientNotFoundError(nric)

    def add(self, patient: Patient) -> None:
        if self.contains(patient):
            raise DuplicatePatientError(patient.nric)
        self._patients.append(patient)

    def set_patient(self, target: Patient, replacement: Patient) -> None:
        index = self._index_of(target)
        if not target.is_same_patient(replacement) and self.contains(replacement):
            raise DuplicatePatientError(replacement.nric)
        self._patients[index] = replacement

    def delete_by_nric(self, nric: str) -> None:
        patient = self.get_by_nric(nric)
        self._patients.remove(patient)

    def set_patients(self, patients: Iterable[Patient]) -> None:
        """Replace the whole list; fails without changes if ``patients`` has duplicates."""
        patients = list(patients)
        nrics = {p.nric for p in patients}
        if len(nrics) != len(patients):
            raise DuplicatePatientError()
        self._patients = patients

    def as_tuple(self) -> tuple[Patient, ...]:
        return tuple(self._patients)

    def _index_of(self, patient: Patient) -> int:
        try:
            return self._patients.index(patient)
        except ValueError:
            raise PatientNotFoundError(patient.nric) from None

    def __iter__(self) -> Iterator[Patient]:
        return iter(tuple(self._patients))

    def __len__(self) -> int:
        return len(self._patients)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UniquePatientList):
            return NotImplemented
        return self._patients == other._patients

    def __repr__(self) -> str:
        return f"UniquePatientList({self._patients!r})"
