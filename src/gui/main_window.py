"""
Bosquejo Main Window
Page-based molecular sketcher with menu bar, drawing toolbar and canvas.
"""
from PyQt6.QtWidgets import QMainWindow
from PyQt6.QtCore import Qt
from PyQt6.QtGui import QAction, QKeySequence

from gui.canvas import BosquejoCanvas
from gui.toolbar import BosquejoToolbar

MODE_NAMES = {
    "select": "Seleccionar",
    "atom": "Átomo",
    "erase": "Borrar",
}


class BosquejoWindow(QMainWindow):
    """
    Main window for the Bosquejo molecular sketcher.
    """
    def __init__(self) -> None:
        super().__init__()
        self.setWindowTitle("Bosquejo - Editor Molecular")
        self.resize(1000, 800)

        # === CENTRAL CANVAS ===
        self.canvas = BosquejoCanvas()
        self.setCentralWidget(self.canvas)

        # === MENU ===
        self._create_actions()
        self._create_menu_bar()

        # === LEFT TOOLBAR (Drawing tools) ===
        self.toolbar = BosquejoToolbar()
        self.addToolBar(Qt.ToolBarArea.LeftToolBarArea, self.toolbar)

        # === SIGNAL CONNECTIONS ===
        self.toolbar.mode_changed.connect(self.canvas.set_mode)
        self.toolbar.element_changed.connect(self.canvas.set_active_element)
        self.toolbar.bond_order_changed.connect(self.canvas.set_bond_order)
        self.toolbar.mode_changed.connect(self._update_status)
        self.toolbar.element_changed.connect(self._update_status)
        self.toolbar.bond_order_changed.connect(self._update_status)
        self.canvas.status_changed.connect(self.statusBar().showMessage)

        # Sync defaults selected during toolbar init
        self.canvas.set_active_element(self.toolbar.current_element())
        self.canvas.set_bond_order(self.toolbar.current_bond_order())

        # === STATUS BAR ===
        self._update_status()

    def _create_actions(self) -> None:
        self.action_new = QAction("&Nuevo", self)
        self.action_new.setShortcut(QKeySequence.StandardKey.New)
        self.action_new.triggered.connect(self.canvas.clear_canvas)

        self.action_quit = QAction("&Salir", self)
        self.action_quit.setShortcut(QKeySequence.StandardKey.Quit)
        self.action_quit.triggered.connect(self.close)

        self.action_zoom_in = QAction("Acercar", self)
        self.action_zoom_in.setShortcut(QKeySequence.StandardKey.ZoomIn)
        self.action_zoom_in.triggered.connect(self.canvas.zoom_in)

        self.action_zoom_out = QAction("Alejar", self)
        self.action_zoom_out.setShortcut(QKeySequence.StandardKey.ZoomOut)
        self.action_zoom_out.triggered.connect(self.canvas.zoom_out)

    def _create_menu_bar(self) -> None:
        menubar = self.menuBar()

        file_menu = menubar.addMenu("&Archivo")
        file_menu.addAction(self.action_new)
        file_menu.addSeparator()
        file_menu.addAction(self.action_quit)

        view_menu = menubar.addMenu("&Ver")
        view_menu.addAction(self.action_zoom_in)
        view_menu.addAction(self.action_zoom_out)

    def _update_status(self, *_args) -> None:
        state = self.canvas.controller.state
        mode = MODE_NAMES.get(state.active_mode.value, state.active_mode.value)
        self.statusBar().showMessage(
            f"Herramienta: {mode} | Elemento: {state.default_element} | "
            f"Orden de enlace: {state.active_bond_order}"
        )
