"""Validation helpers for the intake form fields."""

import re
from typing import Optional

from models import FormData, Modality

CEDULA_RE = re.compile(r"[0-9]{10}")
PHONE_RE = re.compile(r"09[0-9]{8}")

MIN_PROVINCE = 1
MAX_PROVINCE = 24


def validate_cedula(value) -> bool:
    """Check an Ecuadorian national ID (cédula).

    The first two digits are the province code (01-24) and the tenth digit
    is a modulus-10 check digit over the first nine.

    Args:
        value: Candidate ID as typed by the user

    Returns:
        True if the ID is well formed and the check digit matches
    """
    if not isinstance(value, str) or not CEDULA_RE.fullmatch(value):
        return False

    digits = [int(c) for c in value]
    province = digits[0] * 10 + digits[1]
    if province < MIN_PROVINCE or province > MAX_PROVINCE:
        return False

    total = 0
    for i, v in enumerate(digits[:9]):
        if i % 2 == 0:
            v *= 2
            if v > 9:
                v -= 9
        total += v

    check_digit = (10 - total % 10) % 10
    return check_digit == digits[9]


def validate_phone(value) -> bool:
    """Check a mobile number: 10 digits starting with ``09``."""
    return isinstance(value, str) and PHONE_RE.fullmatch(value) is not None


def split_full_name(full_name: str) -> tuple[str, str]:
    """Split a full name into (given names, family names).

    Positional heuristic:
      4+ tokens -> first two given, next two family (the rest is dropped)
      3 tokens  -> first two given, third family
      2 tokens  -> one given, one family
      otherwise -> everything is the given name
    """
    tokens = (full_name or "").split()
    if len(tokens) >= 4:
        return " ".join(tokens[:2]), " ".join(tokens[2:4])
    if len(tokens) == 3:
        return " ".join(tokens[:2]), tokens[2]
    if len(tokens) == 2:
        return tokens[0], tokens[1]
    return (full_name or "").strip(), ""


def resolve_names(form: FormData) -> tuple[str, str]:
    """Explicit given/family fields win over splitting the full name."""
    given = form.given_names.strip()
    family = form.family_names.strip()
    if given and family:
        return given, family
    return split_full_name(form.full_name)


def missing_fields(
    form: FormData, modality: Optional[Modality], program_ids: list[int]
) -> list[str]:
    """Return the names of required inputs that are empty."""
    missing = []
    has_name = form.full_name.strip() or (
        form.given_names.strip() and form.family_names.strip()
    )
    if not has_name:
        missing.append("nombre")
    if not form.cedula.strip():
        missing.append("cedula")
    if not form.email.strip():
        missing.append("correo")
    if not form.phone.strip():
        missing.append("celular")
    if modality is None:
        missing.append("modalidad")
    if not program_ids:
        missing.append("carreras")
    return missing
