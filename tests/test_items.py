import os
import sys
import unittest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src")))

from PyQt6.QtCore import QPointF
from PyQt6.QtGui import QColor
from PyQt6.QtWidgets import QApplication

from core.model import Atom, Bond, EditorSettings, MutationStatus
from gui.canvas import BosquejoCanvas
from gui.icons import draw_bond_icon, draw_generic_icon, draw_glyph_icon
from gui.items import AtomItem, BondItem, PreviewBondItem
from gui.style import CHEMDOODLE_LIKE


class SceneItemsTest(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls._app = QApplication.instance() or QApplication([])

    def test_atom_label_shows_element(self):
        atom = Atom(id=1, element="N", x=10.0, y=20.0)
        item = AtomItem(atom)
        self.assertEqual(item.label.toPlainText(), "N")
        self.assertTrue(item.label.isVisible())
        self.assertEqual((item.pos().x(), item.pos().y()), (10.0, 20.0))

    def test_atom_selection_changes_outline(self):
        item = AtomItem(Atom(id=1, element="C", x=0.0, y=0.0))
        item.set_selected(True)
        self.assertEqual(item.pen().color(), QColor(CHEMDOODLE_LIKE.selected_color))
        item.set_selected(False)
        self.assertEqual(item.pen().color(), QColor(CHEMDOODLE_LIKE.atom_stroke_color))

    def test_bond_path_has_one_stroke_per_order(self):
        a1 = Atom(id=1, element="C", x=0.0, y=0.0)
        a2 = Atom(id=2, element="C", x=40.0, y=0.0)
        for order in (1, 2, 3):
            item = BondItem(Bond(id=1, a1_id=1, a2_id=2, order=order), a1, a2)
            # moveTo + lineTo por trazo
            self.assertEqual(item.path().elementCount(), 2 * order)

    def test_bond_offset_defaults_to_editor_settings(self):
        a1 = Atom(id=1, element="C", x=0.0, y=0.0)
        a2 = Atom(id=2, element="C", x=40.0, y=0.0)
        triple = Bond(id=1, a1_id=1, a2_id=2, order=3)

        default = BondItem(triple, a1, a2).path()
        ys = sorted({round(default.elementAt(i).y, 6) for i in range(default.elementCount())})
        offset = EditorSettings().double_offset
        self.assertEqual(ys, [round(-offset, 6), 0.0, round(offset, 6)])

        wide = BondItem(triple, a1, a2, offset=6.0).path()
        ys = sorted({round(wide.elementAt(i).y, 6) for i in range(wide.elementCount())})
        self.assertEqual(ys, [-6.0, 0.0, 6.0])

    def test_toolbar_icons_render(self):
        icons = [draw_bond_icon(order) for order in (1, 2, 3)]
        icons += [draw_generic_icon("pointer"), draw_generic_icon("eraser"), draw_glyph_icon("Cl")]
        for icon in icons:
            self.assertFalse(icon.pixmap(32, 32).isNull())

    def test_preview_visibility(self):
        item = PreviewBondItem()
        self.assertFalse(item.isVisible())
        item.update_line(QPointF(0.0, 0.0), QPointF(30.0, 0.0))
        self.assertTrue(item.isVisible())
        item.hide_preview()
        self.assertFalse(item.isVisible())


class CanvasTest(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls._app = QApplication.instance() or QApplication([])

    def test_refresh_mirrors_snapshot(self):
        canvas = BosquejoCanvas()
        controller = canvas.controller
        origin = controller.on_pointer_down(QPointF(100.0, 100.0)).atom_id
        controller.editor.grow(origin, 2, "O")
        canvas.refresh()

        self.assertEqual(set(canvas.atom_items), set(controller.snapshot().atoms))
        self.assertEqual(len(canvas.bond_items), 1)

        canvas.clear_canvas()
        self.assertEqual(canvas.atom_items, {})
        self.assertEqual(canvas.bond_items, {})

    def test_rejection_is_reported(self):
        canvas = BosquejoCanvas()
        messages = []
        canvas.status_changed.connect(messages.append)

        origin = canvas.controller.on_pointer_down(QPointF(100.0, 100.0)).atom_id
        canvas.controller.editor.grow(origin, 3, "C")
        canvas.controller.on_pointer_down(QPointF(100.0, 100.0))
        canvas.controller.set_bond_order(2)
        canvas.controller.on_pointer_down(QPointF(100.0, 100.0))
        result = canvas.controller.on_pointer_up(QPointF(100.0, 100.0))
        self.assertEqual(result.status, MutationStatus.VALENCE_EXCEEDED)

        canvas._report(result)
        self.assertEqual(messages[-1], "Valencia máxima alcanzada")

    def test_atoms_past_paper_edge_stay_editable(self):
        canvas = BosquejoCanvas()
        graph = canvas.controller.editor.graph

        self.assertTrue(canvas.press_at(QPointF(770.0, 500.0)))
        origin = canvas.controller.last_result.atom_id
        grown = canvas.controller.editor.grow(origin, 1, "C")
        edge_atom = graph.get_atom(grown.atom_id)
        self.assertFalse(canvas._is_on_paper(edge_atom.x, edge_atom.y))

        canvas.set_mode("erase")
        self.assertTrue(canvas.press_at(QPointF(edge_atom.x, edge_atom.y)))
        self.assertFalse(graph.has_atom(edge_atom.id))
        self.assertNotIn(edge_atom.id, canvas.atom_items)

    def test_empty_press_outside_paper_is_ignored(self):
        canvas = BosquejoCanvas()
        self.assertFalse(canvas.press_at(QPointF(850.0, 500.0)))
        self.assertFalse(canvas.press_at(QPointF(10.0, 10.0)))
        self.assertEqual(canvas.controller.editor.graph.atoms, {})

    def test_mode_change_from_toolbar_value(self):
        canvas = BosquejoCanvas()
        canvas.set_mode("erase")
        self.assertEqual(canvas.controller.state.active_mode.value, "erase")
        canvas.set_active_element("S")
        self.assertEqual(canvas.controller.state.default_element, "S")


if __name__ == "__main__":
    unittest.main()
