"""
Bosquejo Canvas
Page-based canvas using QGraphicsView/QGraphicsScene.

The canvas owns no editing logic: it forwards pointer events to a
`GestureController` and redraws the scene from its snapshot.
"""
from __future__ import annotations

import logging
from typing import Optional

from PyQt6.QtWidgets import (
    QGraphicsView,
    QGraphicsScene,
    QGraphicsRectItem,
    QGraphicsDropShadowEffect,
)
from PyQt6.QtGui import QPainter, QPen, QColor, QBrush, QWheelEvent
from PyQt6.QtCore import Qt, QPointF, pyqtSignal

from core.editing import EditResult
from core.geom import neighbor_bond_angles
from core.gesture import GestureController
from core.model import EditMode, EditorSettings, MutationStatus
from core.valence import free_valence
from gui.items import AtomItem, BondItem, PreviewBondItem
from gui.style import CHEMDOODLE_LIKE, DrawingStyle

logger = logging.getLogger(__name__)

# Paper dimensions (A4, approximately)
PAPER_WIDTH = 800
PAPER_HEIGHT = 1000
PAPER_MARGIN = 20  # Margins where atoms shouldn't be placed

STATUS_MESSAGES = {
    MutationStatus.VALENCE_EXCEEDED: "Valencia máxima alcanzada",
    MutationStatus.DUPLICATE_BOND: "Los átomos ya están enlazados",
}


class BosquejoCanvas(QGraphicsView):
    """
    Page-based canvas for drawing molecules.
    Uses QGraphicsView/QGraphicsScene with a centered paper sheet.
    """

    status_changed = pyqtSignal(str)

    def __init__(
        self,
        parent=None,
        settings: Optional[EditorSettings] = None,
        style: DrawingStyle = CHEMDOODLE_LIKE,
    ) -> None:
        super().__init__(parent)

        self.scene = QGraphicsScene()
        self.setScene(self.scene)

        self.controller = (
            GestureController.with_settings(settings) if settings is not None else GestureController()
        )
        self._style = style

        self.atom_items: dict[int, AtomItem] = {}
        self.bond_items: dict[int, BondItem] = {}
        self.hover_atom_id: Optional[int] = None
        self.preview_item: Optional[PreviewBondItem] = None

        self._setup_view()
        self._create_paper()

        self.setMouseTracking(True)
        self.viewport().setMouseTracking(True)
        self.set_mode(EditMode.ATOM.value)

    def _setup_view(self) -> None:
        self.setBackgroundBrush(QBrush(QColor("#E0E0E0")))
        self.setRenderHint(QPainter.RenderHint.Antialiasing)
        self.setRenderHint(QPainter.RenderHint.TextAntialiasing)

        self.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAsNeeded)
        self.setVerticalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAsNeeded)

        margin = 100
        self.scene.setSceneRect(
            -margin,
            -margin,
            PAPER_WIDTH + 2 * margin,
            PAPER_HEIGHT + 2 * margin,
        )

        self.setDragMode(QGraphicsView.DragMode.NoDrag)

        self._zoom_factor = 1.0
        self._min_zoom = 0.25
        self._max_zoom = 4.0

    def _create_paper(self) -> None:
        self.paper = QGraphicsRectItem(0, 0, PAPER_WIDTH, PAPER_HEIGHT)
        self.paper.setBrush(QBrush(Qt.GlobalColor.white))
        self.paper.setPen(QPen(QColor("#CCCCCC"), 1))
        self.paper.setZValue(-10)

        shadow = QGraphicsDropShadowEffect()
        shadow.setBlurRadius(20)
        shadow.setColor(QColor(0, 0, 0, 80))
        shadow.setOffset(5, 5)
        self.paper.setGraphicsEffect(shadow)

        self.scene.addItem(self.paper)
        self.preview_item = PreviewBondItem(self._style)
        self.scene.addItem(self.preview_item)
        self.centerOn(PAPER_WIDTH / 2, PAPER_HEIGHT / 2)

    # --- Configuración recibida de la barra de herramientas --------------

    def set_mode(self, mode: str) -> None:
        if not self.controller.set_mode(mode):
            return
        if self.controller.state.active_mode == EditMode.SELECT:
            self.setCursor(Qt.CursorShape.ArrowCursor)
        else:
            self.setCursor(Qt.CursorShape.CrossCursor)
        self.refresh()

    def set_active_element(self, element: str) -> None:
        self.controller.set_element(element)
        self.refresh()

    def set_bond_order(self, order: int) -> None:
        self.controller.set_bond_order(order)
        self.refresh()

    # --- Eventos del ratón -------------------------------------------------

    def mousePressEvent(self, event) -> None:
        scene_pos = self.mapToScene(event.pos())

        if event.button() != Qt.MouseButton.LeftButton or not self.press_at(scene_pos):
            super().mousePressEvent(event)

    def press_at(self, scene_pos: QPointF) -> bool:
        """Envía una pulsación al controlador.

        Fuera del papel solo se aceptan pulsaciones sobre un átomo ya
        dibujado; devuelve `False` si la pulsación se descarta.
        """
        on_atom = self.controller.editor.atom_at(scene_pos) is not None
        if not on_atom and not self._is_on_paper(scene_pos.x(), scene_pos.y()):
            return False
        self._report(self.controller.on_pointer_down(scene_pos))
        self.refresh()
        return True

    def mouseMoveEvent(self, event) -> None:
        scene_pos = self.mapToScene(event.pos())
        self.controller.on_pointer_move(scene_pos)
        self._update_preview()
        self._update_hover(scene_pos)
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event) -> None:
        if event.button() != Qt.MouseButton.LeftButton or self.controller.session is None:
            super().mouseReleaseEvent(event)
            return
        scene_pos = self.mapToScene(event.pos())
        self._report(self.controller.on_pointer_up(scene_pos))
        self.refresh()

    def wheelEvent(self, event: QWheelEvent) -> None:
        if event.angleDelta().y() > 0:
            self.zoom_in()
        else:
            self.zoom_out()

    def zoom_in(self) -> None:
        if self._zoom_factor < self._max_zoom:
            self._zoom_factor *= 1.2
            self.scale(1.2, 1.2)

    def zoom_out(self) -> None:
        if self._zoom_factor > self._min_zoom:
            self._zoom_factor /= 1.2
            self.scale(1 / 1.2, 1 / 1.2)

    def clear_canvas(self) -> None:
        self.controller.clear()
        self.refresh()
        self.status_changed.emit("Lienzo vacío")

    # --- Renderizado -------------------------------------------------------

    def refresh(self) -> None:
        """Redibuja átomos y enlaces a partir de la instantánea actual."""
        for item in list(self.atom_items.values()) + list(self.bond_items.values()):
            self.scene.removeItem(item)
        self.atom_items.clear()
        self.bond_items.clear()
        self.hover_atom_id = None

        snapshot = self.controller.snapshot()
        state = self.controller.state
        for bond in snapshot.bonds.values():
            item = BondItem(
                bond,
                snapshot.atoms[bond.a1_id],
                snapshot.atoms[bond.a2_id],
                neighbor_bond_angles(snapshot, bond.id),
                self._style,
                offset=self.controller.settings.double_offset,
            )
            item.set_selected(bond.id == state.selected_bond)
            self.scene.addItem(item)
            self.bond_items[bond.id] = item
        for atom in snapshot.atoms.values():
            item = AtomItem(atom, self._style)
            item.set_selected(atom.id == state.selected_atom or self._is_session_origin(atom.id))
            self.scene.addItem(item)
            self.atom_items[atom.id] = item
        self._update_preview()

    def _update_preview(self) -> None:
        if self.preview_item is None:
            return
        line = self.controller.preview_line()
        if line is None:
            self.preview_item.hide_preview()
        else:
            self.preview_item.update_line(*line)

    def _update_hover(self, scene_pos: QPointF) -> None:
        hover_atom_id = self.controller.editor.atom_at(scene_pos)
        if hover_atom_id == self.hover_atom_id:
            return
        previous = self.atom_items.get(self.hover_atom_id)
        if previous is not None:
            previous.set_hover(False)
        current = self.atom_items.get(hover_atom_id)
        if current is not None:
            current.set_hover(True)
        self.hover_atom_id = hover_atom_id

    def _is_session_origin(self, atom_id: int) -> bool:
        session = self.controller.session
        return session is not None and session.origin_id == atom_id

    def _report(self, result: EditResult) -> None:
        message = STATUS_MESSAGES.get(result.status)
        if message is None and result.ok and result.atom_id is not None:
            graph = self.controller.editor.graph
            if graph.has_atom(result.atom_id):
                atom = graph.get_atom(result.atom_id)
                message = f"{atom.element}{atom.id}: valencia libre {free_valence(graph, atom.id)}"
        if message is not None:
            self.status_changed.emit(message)

    def _is_on_paper(self, x: float, y: float) -> bool:
        return (
            PAPER_MARGIN <= x <= PAPER_WIDTH - PAPER_MARGIN
            and PAPER_MARGIN <= y <= PAPER_HEIGHT - PAPER_MARGIN
        )
