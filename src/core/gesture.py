"""Máquina de estados de gestos del puntero.

Distingue entre clic y arrastre sobre un átomo y traduce cada gesto en una
operación de `MoleculeEditor`:

- clic sobre un átomo: crecer la cadena desde él;
- arrastre hasta otro átomo: enlazarlos;
- arrastre hasta una zona vacía: extender un enlace en esa dirección.

No depende de widgets; el lienzo solo reenvía posiciones del puntero.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from PyQt6.QtCore import QPointF

from core.editing import EditResult, MoleculeEditor
from core.model import (
    ChemState,
    EditMode,
    EditorSettings,
    MolGraph,
    MolSnapshot,
    MutationStatus,
    VALID_BOND_ORDERS,
    normalize_element,
)
from core.valence import is_known_element

logger = logging.getLogger(__name__)


class GestureState(str, Enum):
    IDLE = "idle"
    PENDING_CLICK = "pending_click"
    DRAGGING = "dragging"


@dataclass
class DragSession:
    """Datos efímeros de un gesto iniciado sobre un átomo."""
    origin_id: int
    down_pos: QPointF
    current_pos: QPointF
    moved: bool = False


_IGNORED = EditResult(MutationStatus.IGNORED)


class GestureController:
    """Orquesta los eventos del puntero sobre el editor molecular.

    Attributes:
        editor: Editor que aplica las mutaciones.
        state: Configuración activa (modo, elemento, orden, selección).
        session: Gesto en curso, o `None` en reposo.
        last_result: Resultado de la última operación despachada.
    """

    def __init__(
        self,
        editor: Optional[MoleculeEditor] = None,
        state: Optional[ChemState] = None,
    ) -> None:
        self.editor = editor if editor is not None else MoleculeEditor()
        self.state = state if state is not None else ChemState()
        self.session: Optional[DragSession] = None
        self.last_result: EditResult = _IGNORED

    @classmethod
    def with_settings(cls, settings: EditorSettings) -> "GestureController":
        return cls(MoleculeEditor(MolGraph(), settings))

    @property
    def settings(self) -> EditorSettings:
        return self.editor.settings

    @property
    def gesture_state(self) -> GestureState:
        if self.session is None:
            return GestureState.IDLE
        if self.session.moved:
            return GestureState.DRAGGING
        return GestureState.PENDING_CLICK

    def snapshot(self) -> MolSnapshot:
        return self.editor.snapshot()

    # --- Configuración -------------------------------------------------

    def set_mode(self, mode: EditMode | str) -> bool:
        """Cambia el modo activo; descarta el gesto en curso."""
        try:
            mode = EditMode(mode)
        except ValueError:
            logger.debug("Unknown mode ignored: %r", mode)
            return False
        self.state.active_mode = mode
        self.state.clear_selection()
        self._end_session()
        return True

    def set_element(self, element: str) -> bool:
        """Selecciona el elemento activo entre los de la tabla de valencias."""
        if not isinstance(element, str) or not is_known_element(element):
            logger.debug("Unknown element ignored: %r", element)
            return False
        self.state.default_element = normalize_element(element)
        self._end_session()
        return True

    def set_bond_order(self, order: int) -> bool:
        if isinstance(order, bool) or order not in VALID_BOND_ORDERS:
            logger.debug("Invalid bond order ignored: %r", order)
            return False
        self.state.active_bond_order = int(order)
        self._end_session()
        return True

    # --- Eventos del puntero ---------------------------------------------

    def on_pointer_down(self, pos: QPointF) -> EditResult:
        """Despacha una pulsación según haya o no un átomo bajo el puntero."""
        atom_id = self.editor.atom_at(pos)
        if atom_id is not None:
            return self.on_pointer_down_on_atom(atom_id, pos)
        return self.on_pointer_down_on_empty(pos)

    def on_pointer_down_on_atom(self, atom_id: int, pos: QPointF) -> EditResult:
        """Pulsación sobre un átomo.

        En modo átomo abre una sesión de gesto (pendiente de clic); en modo
        borrado elimina el átomo; en modo selección lo selecciona.
        """
        self._end_session()
        mode = self.state.active_mode
        if not self.editor.graph.has_atom(atom_id):
            return self._finish(EditResult(MutationStatus.DANGLING_REFERENCE))
        if mode == EditMode.ERASE:
            return self._finish(self.editor.erase_atom(atom_id))
        if mode == EditMode.SELECT:
            self.state.clear_selection()
            self.state.selected_atom = atom_id
            return self._finish(_IGNORED)
        self.session = DragSession(origin_id=atom_id, down_pos=QPointF(pos), current_pos=QPointF(pos))
        return self._finish(_IGNORED)

    def on_pointer_down_on_empty(self, pos: QPointF) -> EditResult:
        """Pulsación fuera de cualquier átomo; se resuelve de inmediato."""
        self._end_session()
        mode = self.state.active_mode
        if mode == EditMode.ATOM:
            return self._finish(self.editor.place_atom(pos, self.state.default_element))
        if mode == EditMode.ERASE:
            return self._finish(self.editor.erase_at(pos))
        self.state.clear_selection()
        self.state.selected_bond = self.editor.bond_at(pos)
        return self._finish(_IGNORED)

    def on_pointer_move(self, pos: QPointF) -> None:
        """Actualiza el gesto en curso; nunca modifica la molécula."""
        session = self.session
        if session is None:
            return
        session.current_pos = QPointF(pos)
        if not session.moved:
            dist = math.hypot(pos.x() - session.down_pos.x(), pos.y() - session.down_pos.y())
            if dist > self.settings.drag_threshold:
                session.moved = True

    def on_pointer_up(self, pos: QPointF) -> EditResult:
        """Cierra el gesto y aplica la mutación que corresponda.

        La sesión se descarta siempre, se haya aplicado o no la mutación.
        """
        session = self.session
        self._end_session()
        if session is None:
            return self._finish(_IGNORED)
        if not self.editor.graph.has_atom(session.origin_id):
            return self._finish(EditResult(MutationStatus.DANGLING_REFERENCE))

        order = self.state.active_bond_order
        element = self.state.default_element
        if not session.moved:
            return self._finish(self.editor.grow(session.origin_id, order, element))

        target_id = self.editor.atom_at(pos)
        if target_id == session.origin_id:
            return self._finish(EditResult(MutationStatus.CANCELLED))
        if target_id is not None:
            return self._finish(self.editor.connect(session.origin_id, target_id, order))
        return self._finish(self.editor.extend(session.origin_id, pos, order, element))

    def preview_line(self) -> Optional[Tuple[QPointF, QPointF]]:
        """Segmento de previsualización mientras se arrastra desde un átomo."""
        session = self.session
        if session is None or not session.moved:
            return None
        origin = self.editor.graph.atoms.get(session.origin_id)
        if origin is None:
            return None
        return QPointF(origin.x, origin.y), QPointF(session.current_pos)

    def clear(self) -> None:
        """Vacía la molécula y reinicia el estado del gesto."""
        self._end_session()
        self.state.clear_selection()
        self.editor.graph.clear()

    def _end_session(self) -> None:
        self.session = None

    def _finish(self, result: EditResult) -> EditResult:
        self.last_result = result
        return result
