"""Utilities for mapping intake data to and from the backend JSON format."""

import logging
from dataclasses import asdict
from typing import Any, Optional

from models import Candidate, Modality, Program

logger = logging.getLogger(__name__)

# Candidate attribute -> backend key
CANDIDATE_KEYS = {
    "given_names": "nombres",
    "family_names": "apellidos",
    "cedula": "cedula",
    "email": "correo",
    "phone": "telefono",
    "address": "direccion",
    "status": "estado",
    "contact_attempts": "intentosContacto",
    "birth_date": "fechaNacimiento",
    "academic_period_id": "periodoAcademicoId",
}


def candidate_to_payload(candidate: Candidate) -> dict[str, Any]:
    """Build the body of ``POST /postulantes``.

    Program ids are not sent here; they are attached with a separate call.

    Args:
        candidate: Candidate to serialize

    Returns:
        Dictionary with the backend field names; optional fields left as
        None are omitted
    """
    data = asdict(candidate)
    data["status"] = candidate.status.value
    data.pop("program_ids")

    payload: dict[str, Any] = {}
    for attr, value in data.items():
        if value is None:
            continue
        payload[CANDIDATE_KEYS[attr]] = value
    return payload


def program_ids_payload(program_ids: list[int]) -> dict[str, list[int]]:
    """Build the body of ``POST /postulante_carrera/{id}``."""
    return {"carreras": list(program_ids)}


def program_from_json(rec: Any) -> Optional[Program]:
    """Parse one program record.

    Args:
        rec: Record as returned by ``GET /api/carreras``

    Returns:
        Program, or None if the record is not an object, has no numeric id
        or has an unknown modality
    """
    if not isinstance(rec, dict):
        logger.warning("Carrera con formato inválido ignorada: %r", rec)
        return None

    raw_id = rec.get("id")
    if raw_id is None:
        logger.warning("Carrera sin id ignorada: %r", rec)
        return None
    try:
        program_id = int(raw_id)
    except (TypeError, ValueError):
        logger.warning("Carrera con id no numérico %r ignorada", raw_id)
        return None

    try:
        modality = Modality(rec.get("modalidad"))
    except ValueError:
        logger.warning(
            "Carrera %s con modalidad desconocida %r ignorada",
            raw_id,
            rec.get("modalidad"),
        )
        return None
    return Program(id=program_id, name=rec.get("nombre") or "", modality=modality)


def programs_from_json(raw: list[dict[str, Any]]) -> list[Program]:
    """Parse the program catalog, skipping unusable records."""
    programs: list[Program] = []
    for rec in raw or []:
        program = program_from_json(rec)
        if program:
            programs.append(program)
    return programs
