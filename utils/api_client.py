"""HTTP client for the admissions backend."""

import logging
from typing import Any, Optional

import requests

import config
from models import Candidate, Program
from utils.json_util import (
    candidate_to_payload,
    program_from_json,
    program_ids_payload,
    programs_from_json,
)

logger = logging.getLogger(__name__)


class ApiError(RuntimeError):
    """Network failure or non-success response from the backend."""

    def __init__(self, message: str, url: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class AdmissionsClient:
    """Thin REST client: one attempt per call, no retries."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or config.API_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else config.REQUEST_TIMEOUT
        self.session = session or requests.Session()
        self.session.headers.update(
            {"Content-Type": "application/json", "Accept": "application/json"}
        )

    def _request(self, method: str, path: str, **kwargs) -> Any:
        """Send a request and decode the JSON body.

        Raises:
            ApiError: On connection errors, timeouts and non-2xx statuses
        """
        url = self.base_url + path
        logger.debug("%s %s", method, url)
        try:
            resp = self.session.request(method, url, timeout=self.timeout, **kwargs)
            resp.raise_for_status()
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            body = e.response.text if e.response is not None else ""
            raise ApiError(
                f"Error {status} en {method} {path}: {body or e}", url, status
            ) from e
        except requests.RequestException as e:
            raise ApiError(f"No se pudo conectar con {url}: {e}", url) from e

        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as e:
            raise ApiError(
                f"Respuesta no JSON en {method} {path}", url, resp.status_code
            ) from e

    def get_programs(self) -> list[Program]:
        """List the program catalog."""
        raw = self._request("GET", config.PROGRAMS_PATH)
        if not isinstance(raw, list):
            raise ApiError(
                "El catálogo de carreras no es una lista",
                self.base_url + config.PROGRAMS_PATH,
            )
        programs = programs_from_json(raw)
        logger.info("Cargadas %d carreras", len(programs))
        return programs

    def get_program(self, program_id: int) -> Optional[Program]:
        raw = self._request("GET", f"{config.PROGRAMS_PATH}/{program_id}")
        return program_from_json(raw) if isinstance(raw, dict) else None

    def create_candidate(self, candidate: Candidate) -> int:
        """Create the candidate record and return its id.

        Raises:
            ApiError: If the call fails or the response carries no id
        """
        url = self.base_url + config.CANDIDATES_PATH
        created = self._request(
            "POST", config.CANDIDATES_PATH, json=candidate_to_payload(candidate)
        )
        if not isinstance(created, dict) or created.get("id") is None:
            raise ApiError("El postulante creado no devolvió un id", url)
        try:
            candidate_id = int(created["id"])
        except (TypeError, ValueError) as e:
            raise ApiError(
                f"El postulante creado devolvió un id no numérico: {created['id']!r}",
                url,
            ) from e
        logger.info("Postulante %s creado con id %d", candidate.cedula, candidate_id)
        return candidate_id

    def attach_programs(self, candidate_id: int, program_ids: list[int]) -> None:
        """Attach the selected programs to a candidate in one call."""
        path = config.CANDIDATE_PROGRAMS_PATH.format(candidate_id=candidate_id)
        self._request("POST", path, json=program_ids_payload(program_ids))
        logger.info(
            "Asignadas %d carreras al postulante %d", len(program_ids), candidate_id
        )
