"""Form submission state machine."""

import logging
from enum import Enum
from typing import Optional

import config
from models import Candidate, ErrorKind, FormData, Notification, Severity
from utils.api_client import AdmissionsClient, ApiError
from utils.selection import ProgramSelection
from utils.validators import (
    missing_fields,
    resolve_names,
    validate_cedula,
    validate_phone,
)

logger = logging.getLogger(__name__)


class SubmissionState(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    FAILED = "failed"


class SubmissionController:
    """Validate the form, create the candidate and attach its programs.

    Flow: IDLE -> VALIDATING -> SUBMITTING -> SUCCESS | FAILED -> IDLE.
    Validation failures go straight back to IDLE. There is no rollback: if the
    candidate is created and the program call fails, the record stays without
    programs.
    """

    def __init__(
        self,
        client: AdmissionsClient,
        selection: ProgramSelection,
        *,
        address: Optional[str] = None,
        birth_date: Optional[str] = None,
        academic_period_id: Optional[int] = None,
    ):
        self.client = client
        self.selection = selection
        self.address = address if address is not None else config.DEFAULT_ADDRESS
        self.birth_date = (
            birth_date if birth_date is not None else config.DEFAULT_BIRTH_DATE
        )
        self.academic_period_id = (
            academic_period_id
            if academic_period_id is not None
            else config.DEFAULT_ACADEMIC_PERIOD_ID
        )
        self.state = SubmissionState.IDLE
        self.history: list[SubmissionState] = [SubmissionState.IDLE]
        self.last_candidate_id: Optional[int] = None

    def _move(self, state: SubmissionState) -> None:
        logger.debug("Submission %s -> %s", self.state.value, state.value)
        self.state = state
        self.history.append(state)

    def _validate(self, form: FormData) -> Optional[Notification]:
        missing = missing_fields(form, self.selection.modality, self.selection.flatten())
        if missing:
            logger.info("Campos faltantes: %s", ", ".join(missing))
            return Notification(
                Severity.WARN,
                "Campos incompletos",
                "Complete todos los campos y seleccione al menos una carrera.",
                ErrorKind.MISSING_FIELDS,
            )
        if not validate_cedula(form.cedula.strip()):
            return Notification(
                Severity.ERROR,
                "Cédula inválida",
                "Ingrese un número de cédula válido en Ecuador.",
                ErrorKind.INVALID_NATIONAL_ID,
            )
        if not validate_phone(form.phone.strip()):
            return Notification(
                Severity.ERROR,
                "Celular inválido",
                "Ingrese un celular de 10 dígitos que empiece con 09.",
                ErrorKind.INVALID_PHONE,
            )
        return None

    def build_candidate(self, form: FormData) -> Candidate:
        given, family = resolve_names(form)
        return Candidate(
            given_names=given,
            family_names=family,
            cedula=form.cedula.strip(),
            email=form.email.strip(),
            phone=form.phone.strip(),
            address=self.address,
            birth_date=self.birth_date,
            academic_period_id=self.academic_period_id,
            program_ids=self.selection.flatten(),
        )

    def submit(self, form: FormData) -> Notification:
        """Run one submit attempt and return the message for the user.

        On success the form and the selection are cleared; on any failure
        they are kept so the user can correct them.
        """
        if self.state is SubmissionState.SUBMITTING:
            logger.warning("Submit ignorado: ya hay un envío en curso")
            return Notification(
                Severity.WARN,
                "Envío en curso",
                "Espere a que termine el envío anterior.",
            )

        self._move(SubmissionState.VALIDATING)
        problem = self._validate(form)
        if problem:
            self._move(SubmissionState.IDLE)
            return problem

        candidate = self.build_candidate(form)
        self.last_candidate_id = None
        self._move(SubmissionState.SUBMITTING)

        try:
            candidate_id = self.client.create_candidate(candidate)
            self.last_candidate_id = candidate_id
            self.client.attach_programs(candidate_id, candidate.program_ids)
        except ApiError as e:
            if self.last_candidate_id is not None:
                logger.warning(
                    "Postulante %d creado sin carreras: %s", self.last_candidate_id, e
                )
            else:
                logger.error("No se pudo crear el postulante: %s", e)
            self._move(SubmissionState.FAILED)
            self._move(SubmissionState.IDLE)
            return Notification(
                Severity.ERROR,
                "Error al enviar",
                "No se pudo registrar la postulación. Intente nuevamente.",
                ErrorKind.NETWORK_OR_SERVER,
            )
        except Exception:
            # never leave the controller stuck in SUBMITTING
            self._move(SubmissionState.FAILED)
            self._move(SubmissionState.IDLE)
            raise

        self._move(SubmissionState.SUCCESS)
        detail = (
            f"Nombre: {candidate.given_names} {candidate.family_names}".rstrip()
            + f" | Cédula: {candidate.cedula}"
            + f" | Carreras: {', '.join(str(i) for i in candidate.program_ids)}"
        )
        self.reset(form)
        self._move(SubmissionState.IDLE)
        return Notification(Severity.SUCCESS, "Postulante registrado", detail)

    def reset(self, form: FormData) -> None:
        """Clear the form fields and the program selection."""
        form.clear()
        self.selection.reset()
