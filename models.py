"""Data models for the admission intake form."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Modality(str, Enum):
    """How a program is delivered. Values are the backend tags."""

    PRESENCIAL = "PRESENCIAL"
    SEMIPRESENCIAL = "SEMIPRESENCIAL"
    HIBRIDA = "HIBRIDA"
    ON_LINE = "ON_LINE"

    @property
    def label(self) -> str:
        return MODALITY_LABELS[self]


MODALITY_LABELS = {
    Modality.PRESENCIAL: "Presencial",
    Modality.SEMIPRESENCIAL: "Semipresencial",
    Modality.HIBRIDA: "Híbrida",
    Modality.ON_LINE: "En línea",
}


class CandidateStatus(str, Enum):
    PENDIENTE = "PENDIENTE"
    ACEPTADO = "ACEPTADO"
    RECHAZADO = "RECHAZADO"


class Severity(str, Enum):
    SUCCESS = "success"
    WARN = "warn"
    ERROR = "error"


class ErrorKind(str, Enum):
    MISSING_FIELDS = "missing_fields"
    INVALID_NATIONAL_ID = "invalid_national_id"
    INVALID_PHONE = "invalid_phone"
    NETWORK_OR_SERVER = "network_or_server"


@dataclass
class Program:
    """Represents an academic program (carrera).

    Attributes:
        id: Backend identifier
        name: Display name
        modality: Delivery modality of the program
    """

    id: int
    name: str
    modality: Modality


@dataclass
class Candidate:
    """Represents a candidate as sent to the backend.

    Attributes:
        given_names: Given names (nombres)
        family_names: Family names (apellidos)
        cedula: 10-digit national ID
        email: Contact email
        phone: Mobile phone number
        address: Postal address, not collected by the form
        birth_date: ISO birth date, not collected by the form
        academic_period_id: Academic period the candidate applies to
        status: Admission status, PENDIENTE for new records
        contact_attempts: Number of times the candidate was contacted
        program_ids: Selected program identifiers
    """

    given_names: str
    family_names: str
    cedula: str
    email: str
    phone: str
    address: str
    birth_date: Optional[str] = None
    academic_period_id: Optional[int] = None
    status: CandidateStatus = CandidateStatus.PENDIENTE
    contact_attempts: int = 0
    program_ids: list[int] = field(default_factory=list)


@dataclass
class FormData:
    """Raw values typed into the form.

    ``given_names`` and ``family_names`` are optional explicit fields; when
    both are filled they win over splitting ``full_name``.
    """

    full_name: str = ""
    cedula: str = ""
    email: str = ""
    phone: str = ""
    given_names: str = ""
    family_names: str = ""

    def clear(self) -> None:
        self.full_name = ""
        self.cedula = ""
        self.email = ""
        self.phone = ""
        self.given_names = ""
        self.family_names = ""


@dataclass
class Notification:
    """Message shown to the user after a submit attempt."""

    severity: Severity
    summary: str
    detail: str
    kind: Optional[ErrorKind] = None

    @property
    def ok(self) -> bool:
        return self.severity is Severity.SUCCESS
