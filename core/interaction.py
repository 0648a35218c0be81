# core/interaction.py
from dataclasses import dataclass
from typing import Optional

from core import constants


@dataclass
class InteractionState:
    """
    Región bajo el puntero y región seleccionada, identificadas por su
    region_id. Solo cambia a través de las transiciones de abajo; cada una
    devuelve True si el estado cambió.
    """
    hovered: Optional[str] = None
    selected: Optional[str] = None

    def enter(self, region_id: str) -> bool:
        changed = self.hovered != region_id
        self.hovered = region_id
        return changed

    def leave(self, region_id: str) -> bool:
        # Solo se limpia si el puntero sale de la región marcada
        if self.hovered != region_id:
            return False
        self.hovered = None
        return True

    def click(self, region_id: str) -> bool:
        changed = self.selected != region_id
        self.selected = region_id
        return changed

    def clear_selection(self) -> bool:
        changed = self.selected is not None
        self.selected = None
        return changed

    def clear(self) -> bool:
        changed = self.hovered is not None or self.selected is not None
        self.hovered = None
        self.selected = None
        return changed

    def is_hovered(self, region_id: str) -> bool:
        return self.hovered == region_id

    def is_selected(self, region_id: str) -> bool:
        return self.selected == region_id

    def style_classes(self, region_id: str) -> list[str]:
        classes = [constants.REGION_CLASS]
        if self.is_hovered(region_id):
            classes.append(constants.HOVERED_CLASS)
        if self.is_selected(region_id):
            classes.append(constants.SELECTED_CLASS)
        return classes
