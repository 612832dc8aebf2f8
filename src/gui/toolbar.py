"""
Bosquejo Toolbar
Vertical toolbar with the drawing modes, element palette and bond orders.
"""
from __future__ import annotations

from PyQt6.QtWidgets import (
    QToolBar,
    QToolButton,
    QMenu,
    QWidget,
    QGridLayout,
    QWidgetAction,
)
from PyQt6.QtGui import QAction, QActionGroup
from PyQt6.QtCore import pyqtSignal, Qt, QSize

from core.model import EditMode
from core.valence import MAX_VALENCE_MAP
from gui.icons import draw_bond_icon, draw_generic_icon, draw_glyph_icon
from gui.style import TOOL_PALETTE_STYLESHEET

BOND_ORDER_LABELS = {1: "Enlace sencillo", 2: "Enlace doble", 3: "Enlace triple"}


class BosquejoToolbar(QToolBar):
    """
    Vertical toolbar for selecting drawing tools.
    Emits the mode, element and bond order chosen by the user.
    """

    mode_changed = pyqtSignal(str)
    element_changed = pyqtSignal(str)
    bond_order_changed = pyqtSignal(int)

    def __init__(self, parent=None) -> None:
        super().__init__("Herramientas de Dibujo", parent)
        self.setOrientation(Qt.Orientation.Vertical)
        self.setMovable(False)
        self.setFloatable(False)
        self.setIconSize(QSize(28, 28))
        self.setStyleSheet(TOOL_PALETTE_STYLESHEET)

        self.mode_group = QActionGroup(self)
        self.mode_group.setExclusive(True)
        self.order_group = QActionGroup(self)
        self.order_group.setExclusive(True)

        self._current_element = "C"
        self._current_order = 1

        self.select_action = self._add_mode_action(draw_generic_icon("pointer"), "Seleccionar", EditMode.SELECT)
        self.atom_button, self.atom_action = self._add_element_button()
        self.erase_action = self._add_mode_action(draw_generic_icon("eraser"), "Borrar", EditMode.ERASE)
        self.addSeparator()

        self.order_actions: dict[int, QAction] = {}
        for order, text in BOND_ORDER_LABELS.items():
            self.order_actions[order] = self._add_order_action(order, text)

        self.atom_action.setChecked(True)
        self.order_actions[1].setChecked(True)

    def _add_mode_action(self, icon, tooltip: str, mode: EditMode) -> QAction:
        action = QAction(icon, "", self)
        action.setObjectName(f"tool_{mode.value}")
        action.setToolTip(tooltip)
        action.setCheckable(True)
        self.mode_group.addAction(action)
        self.addAction(action)
        action.triggered.connect(lambda checked, m=mode.value: self.mode_changed.emit(m))
        return action

    def _add_element_button(self):
        action = QAction(draw_glyph_icon(self._current_element), "", self)
        action.setObjectName("tool_atom")
        action.setToolTip(f"Elemento {self._current_element}")
        action.setCheckable(True)
        self.mode_group.addAction(action)
        action.triggered.connect(lambda checked: self.mode_changed.emit(EditMode.ATOM.value))

        button = QToolButton(self)
        button.setDefaultAction(action)
        button.setPopupMode(QToolButton.ToolButtonPopupMode.MenuButtonPopup)
        menu = QMenu(button)
        button.setMenu(menu)
        self._build_element_palette(menu)
        self.addWidget(button)
        return button, action

    def _add_order_action(self, order: int, tooltip: str) -> QAction:
        action = QAction(draw_bond_icon(order), "", self)
        action.setObjectName(f"bond_order_{order}")
        action.setToolTip(tooltip)
        action.setCheckable(True)
        self.order_group.addAction(action)
        self.addAction(action)
        action.triggered.connect(lambda checked, o=order: self._select_order(o))
        return action

    def _build_element_palette(self, menu: QMenu) -> None:
        """Rellena el menú con una rejilla de botones, uno por elemento."""
        grid_widget = QWidget(menu)
        grid = QGridLayout(grid_widget)
        grid.setContentsMargins(6, 6, 6, 6)
        grid.setSpacing(4)
        columns = 5
        for index, element in enumerate(MAX_VALENCE_MAP):
            button = QToolButton(grid_widget)
            button.setIcon(draw_glyph_icon(element))
            button.setIconSize(QSize(24, 24))
            button.setToolTip(element)
            button.clicked.connect(lambda checked, el=element: self._trigger_element(el, menu))
            grid.addWidget(button, index // columns, index % columns)
        widget_action = QWidgetAction(menu)
        widget_action.setDefaultWidget(grid_widget)
        menu.addAction(widget_action)

    def _trigger_element(self, element: str, menu: QMenu) -> None:
        self.select_element(element)
        menu.close()

    def _select_order(self, order: int) -> None:
        self._current_order = order
        self.order_actions[order].setChecked(True)
        self.bond_order_changed.emit(order)

    def select_element(self, element: str) -> None:
        self.atom_action.setIcon(draw_glyph_icon(element))
        self.atom_action.setToolTip(f"Elemento {element}")
        self.atom_button.setToolTip(f"Elemento {element}")
        self._current_element = element
        self.element_changed.emit(element)
        self.atom_action.setChecked(True)
        self.mode_changed.emit(EditMode.ATOM.value)

    def current_element(self) -> str:
        return self._current_element

    def current_bond_order(self) -> int:
        return self._current_order
