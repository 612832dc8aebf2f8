"""
Elementos de escena de Bosquejo.

Define subclases de QGraphicsItem para átomos, enlaces y la línea de
previsualización del arrastre. Los enlaces se dibujan a partir de los
segmentos que calcula `core.geom.bond_strokes`.
"""
from __future__ import annotations

from typing import Iterable

from PyQt6.QtWidgets import (
    QGraphicsEllipseItem,
    QGraphicsPathItem,
    QGraphicsTextItem,
)
from PyQt6.QtGui import QColor, QFont, QPainterPath, QPen, QBrush
from PyQt6.QtCore import Qt, QPointF

from core.geom import bond_strokes
from core.model import Atom, Bond, EditorSettings
from gui.style import CHEMDOODLE_LIKE, DrawingStyle, ELEMENT_COLORS


class AtomItem(QGraphicsEllipseItem):
    """Elemento gráfico que representa un átomo: círculo y símbolo."""

    def __init__(self, atom: Atom, style: DrawingStyle = CHEMDOODLE_LIKE) -> None:
        """Inicializa la instancia y configura el elemento gráfico.

        Args:
            atom: Átomo del modelo asociado.
            style: Estilo de dibujo aplicado.

        Side Effects:
            Modifica el estado del item o la escena.
        """
        radius = style.atom_radius_px
        super().__init__(-radius, -radius, radius * 2, radius * 2)
        self.atom_id = atom.id
        self.element = atom.element
        self._style = style
        self._is_selected = False
        self._is_hover = False
        self.setPos(atom.x, atom.y)
        self.setZValue(10)

        self.label = QGraphicsTextItem(atom.element, self)
        font = QFont(style.label_font_family)
        font.setPointSizeF(style.label_font_size)
        font.setBold(True)
        self.label.setFont(font)
        self.label.document().setDocumentMargin(0)
        self.label.setDefaultTextColor(QColor(ELEMENT_COLORS.get(atom.element, "#333333")))
        self._center_label()
        self._apply_normal_style()

    def _center_label(self) -> None:
        rect = self.label.boundingRect()
        self.label.setPos(-rect.width() / 2, -rect.height() / 2)

    def _apply_normal_style(self) -> None:
        """Aplica relleno y borde según selección y hover."""
        if self._is_selected:
            outline = QColor(self._style.selected_color)
        elif self._is_hover:
            outline = QColor(self._style.hover_color)
        else:
            outline = QColor(self._style.atom_stroke_color)
        fill = "#F0F0F0" if self._is_hover else self._style.atom_fill_color
        self.setBrush(QBrush(QColor(fill)))
        pen = QPen(outline, self._style.stroke_px * (1.5 if self._is_selected else 1.0))
        pen.setCapStyle(self._style.cap_style)
        pen.setJoinStyle(self._style.join_style)
        self.setPen(pen)

    def set_selected(self, selected: bool) -> None:
        self._is_selected = selected
        self._apply_normal_style()

    def set_hover(self, hover: bool) -> None:
        self._is_hover = hover
        self._apply_normal_style()


class BondItem(QGraphicsPathItem):
    """Elemento gráfico que representa un enlace químico."""

    def __init__(
        self,
        bond: Bond,
        atom1: Atom,
        atom2: Atom,
        neighbor_angles: Iterable[float] = (),
        style: DrawingStyle = CHEMDOODLE_LIKE,
        offset: float = EditorSettings.double_offset,
    ) -> None:
        """Inicializa la instancia y configura el elemento gráfico.

        Args:
            bond: Enlace del modelo asociado.
            atom1: Átomo inicial del enlace.
            atom2: Átomo final del enlace.
            neighbor_angles: Direcciones de los enlaces vecinos, usadas para
                decidir el lado del trazo interior de un enlace doble.
            style: Estilo de dibujo aplicado.
            offset: Separación entre trazos de un enlace múltiple.
        """
        super().__init__()
        self.bond_id = bond.id
        self.order = bond.order
        self._style = style
        self._offset = offset
        self._is_selected = False
        self.setZValue(-5)
        self.setBrush(QBrush(Qt.BrushStyle.NoBrush))
        self._apply_pen()
        self.update_positions(atom1, atom2, neighbor_angles)

    def _apply_pen(self) -> None:
        color = self._style.selected_color if self._is_selected else self._style.bond_color
        pen = QPen(QColor(color), self._style.stroke_px)
        pen.setCapStyle(self._style.cap_style)
        pen.setJoinStyle(self._style.join_style)
        self.setPen(pen)

    def update_positions(self, atom1: Atom, atom2: Atom, neighbor_angles: Iterable[float] = ()) -> None:
        """Reconstruye el trazado a partir de las posiciones de los átomos."""
        path = QPainterPath()
        segments = bond_strokes(
            QPointF(atom1.x, atom1.y),
            QPointF(atom2.x, atom2.y),
            self.order,
            neighbor_angles,
            offset=self._offset,
            inner_trim=self._style.inner_trim_px,
        )
        for start, end in segments:
            path.moveTo(start)
            path.lineTo(end)
        self.setPath(path)

    def set_selected(self, selected: bool) -> None:
        self._is_selected = selected
        self._apply_pen()


class PreviewBondItem(QGraphicsPathItem):
    """Línea de previsualización para colocar enlaces."""

    def __init__(self, style: DrawingStyle = CHEMDOODLE_LIKE) -> None:
        super().__init__()
        pen = QPen(QColor(style.preview_color), style.stroke_px, Qt.PenStyle.DashLine)
        self.setPen(pen)
        self.setBrush(QBrush(Qt.BrushStyle.NoBrush))
        self.setZValue(40)
        self.setVisible(False)

    def update_line(self, p1: QPointF, p2: QPointF) -> None:
        """Actualiza línea.

        Args:
            p1: Punto inicial (átomo de origen).
            p2: Punto final (posición del puntero).

        Side Effects:
            Modifica el estado del item o la escena.
        """
        path = QPainterPath()
        path.moveTo(p1)
        path.lineTo(p2)
        self.setPath(path)
        if not self.isVisible():
            self.setVisible(True)

    def hide_preview(self) -> None:
        self.setVisible(False)
