import logging
from typing import Optional

import config
from models import FormData, Modality, Notification, Program, Severity
from utils.api_client import AdmissionsClient, ApiError
from utils.selection import ProgramSelection
from utils.submission import SubmissionController

SEVERITY_ICONS = {
    Severity.SUCCESS: "✓",
    Severity.WARN: "!",
    Severity.ERROR: "✗",
}


def print_notification(note: Notification) -> None:
    print(f"\n[{SEVERITY_ICONS[note.severity]}] {note.summary}: {note.detail}")


def ask_modality(current: Optional[Modality] = None) -> Optional[Modality]:
    """Ask for a modality; an empty answer keeps ``current``."""
    modalities = list(Modality)
    print("\nModalidades:")
    for i, m in enumerate(modalities, start=1):
        print(f"  {i}. {m.label}")
    hint = f" [{current.label}]" if current else ""
    while True:
        raw = input(f"Seleccione modalidad (número){hint}: ").strip()
        if not raw:
            return current
        if raw.isdigit() and 1 <= int(raw) <= len(modalities):
            return modalities[int(raw) - 1]
        print("Opción no válida.")


def print_programs(selection: ProgramSelection, programs: list[Program]) -> None:
    print(f"\nCarreras disponibles ({selection.modality.label}):")
    for p in programs:
        mark = "x" if selection.is_selected(p.modality, p.id) else " "
        print(f"  [{mark}] {p.id}: {p.name}")


def ask_programs(selection: ProgramSelection) -> None:
    """Toggle programs by id until the user enters an empty line."""
    if selection.modality is None:
        return
    if not selection.eligible:
        print("No hay carreras para esta modalidad.")
        return

    eligible_ids = {p.id for p in selection.eligible}
    while True:
        print_programs(selection, selection.eligible)
        raw = input("Id de carrera para marcar/desmarcar (vacío para terminar): ")
        raw = raw.strip()
        if not raw:
            return
        if not raw.isdigit() or int(raw) not in eligible_ids:
            print("Carrera no válida para esta modalidad.")
            continue
        selection.toggle_program(selection.modality, int(raw))


def fill_form(form: FormData) -> None:
    # empty input keeps the previous value so a failed submit can be corrected
    def ask(label: str, current: str) -> str:
        hint = f" [{current}]" if current else ""
        value = input(f"{label}{hint}: ").strip()
        return value or current

    form.full_name = ask("Nombre completo", form.full_name)
    form.cedula = ask("Cédula", form.cedula)
    form.email = ask("Correo electrónico", form.email)
    form.phone = ask("Número de celular", form.phone)


def main():
    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    client = AdmissionsClient()
    print(f"Cargando carreras desde {client.base_url}...")
    try:
        programs = client.get_programs()
    except ApiError as e:
        logging.getLogger(__name__).error("Error al cargar carreras: %s", e)
        programs = []

    selection = ProgramSelection(programs)
    controller = SubmissionController(client, selection)
    form = FormData()

    print("\n=== Formulario de Postulación ===")
    while True:
        fill_form(form)
        modality = ask_modality(selection.modality)
        if modality != selection.modality:
            selection.set_modality(modality)
        ask_programs(selection)

        note = controller.submit(form)
        print_notification(note)

        again = input("\n¿Registrar otro postulante o corregir? (s/n): ")
        if again.strip().lower() not in ("s", "si", "sí"):
            break


if __name__ == "__main__":
    main()
