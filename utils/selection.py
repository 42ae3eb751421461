"""Modality-scoped program selection state."""

import logging
from typing import Iterable, Optional

import config
from models import Modality, Program

logger = logging.getLogger(__name__)


class ProgramSelection:
    """Selected program ids keyed by modality.

    With ``retain_across_modalities`` False only the active modality may hold
    selections and switching modality drops them. With it True every modality
    keeps its own set and ``flatten`` submits all of them.
    """

    def __init__(
        self,
        catalog: Iterable[Program] = (),
        retain_across_modalities: Optional[bool] = None,
    ):
        if retain_across_modalities is None:
            retain_across_modalities = config.RETAIN_SELECTIONS_ACROSS_MODALITIES
        self.retain_across_modalities = retain_across_modalities
        self.catalog: list[Program] = list(catalog)
        self.modality: Optional[Modality] = None
        self.eligible: list[Program] = []
        self.selected: dict[Modality, set[int]] = {}

    def _programs_for(self, modality: Optional[Modality]) -> list[Program]:
        if modality is None:
            return []
        return [p for p in self.catalog if p.modality == modality]

    def set_modality(self, modality: Optional[Modality]) -> list[Program]:
        """Activate a modality and return the programs offered under it."""
        if modality is not None:
            modality = Modality(modality)
        if modality != self.modality and not self.retain_across_modalities:
            self.selected.clear()
        self.modality = modality
        self.eligible = self._programs_for(modality)
        logger.debug(
            "Modality set to %s, %d eligible programs",
            modality.value if modality else None,
            len(self.eligible),
        )
        return self.eligible

    def toggle_program(self, modality: Modality, program_id: int) -> bool:
        """Flip a program in the set of ``modality``.

        Returns:
            True if the program is selected after the call

        Raises:
            ValueError: If the program is not offered under ``modality`` or,
                in single-modality mode, ``modality`` is not the active one
        """
        modality = Modality(modality)
        if not self.retain_across_modalities and modality != self.modality:
            raise ValueError(
                f"Modalidad {modality.value} no está activa "
                f"(activa: {self.modality.value if self.modality else None})"
            )
        if program_id not in {p.id for p in self._programs_for(modality)}:
            raise ValueError(
                f"La carrera {program_id} no pertenece a la modalidad {modality.value}"
            )

        chosen = self.selected.setdefault(modality, set())
        if program_id in chosen:
            chosen.discard(program_id)
            if not chosen:
                del self.selected[modality]
            return False
        chosen.add(program_id)
        return True

    def is_selected(self, modality: Modality, program_id: int) -> bool:
        return program_id in self.selected.get(Modality(modality), set())

    def flatten(self) -> list[int]:
        """All selected program ids across modalities, sorted."""
        ids: set[int] = set()
        for chosen in self.selected.values():
            ids |= chosen
        return sorted(ids)

    def replace_catalog(self, programs: Iterable[Program]) -> None:
        """Swap the catalog, dropping selections it no longer offers."""
        self.catalog = list(programs)
        self.eligible = self._programs_for(self.modality)
        for modality in list(self.selected):
            offered = {p.id for p in self._programs_for(modality)}
            kept = self.selected[modality] & offered
            if kept:
                self.selected[modality] = kept
            else:
                del self.selected[modality]

    def reset(self) -> None:
        self.modality = None
        self.eligible = []
        self.selected.clear()
