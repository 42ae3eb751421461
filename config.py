# config.py
import os

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if not raw:
        return default
    return raw in ("1", "true", "yes", "si", "sí")


# Backend
API_BASE_URL = os.environ.get("ADMISIONES_API_URL", "http://localhost:8080").rstrip("/")
REQUEST_TIMEOUT = float(os.environ.get("ADMISIONES_TIMEOUT", "20"))

PROGRAMS_PATH = "/api/carreras"
CANDIDATES_PATH = "/postulantes"
CANDIDATE_PROGRAMS_PATH = "/postulante_carrera/{candidate_id}"

# Selection scoping: False -> switching modality drops every selection,
# True -> selections are kept per modality and all of them are submitted
RETAIN_SELECTIONS_ACROSS_MODALITIES = _env_bool("ADMISIONES_RETAIN_SELECTIONS", False)

# Candidate fields the form does not collect
DEFAULT_ADDRESS = os.environ.get("ADMISIONES_DEFAULT_ADDRESS", "Sin dirección")
DEFAULT_BIRTH_DATE = os.environ.get("ADMISIONES_DEFAULT_BIRTH_DATE", "2000-01-01")
DEFAULT_ACADEMIC_PERIOD_ID = int(os.environ.get("ADMISIONES_PERIOD_ID", "1"))

LOG_LEVEL = os.environ.get("ADMISIONES_LOG_LEVEL", "INFO").upper()
