"""Pruebas unitarias para test_valence."""

import os
import sys
import unittest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src")))

from core.model import MolGraph
from core.valence import (
    DEFAULT_MAX_VALENCE,
    can_accept,
    current_valence,
    free_valence,
    is_known_element,
    max_valence,
)


class ValenceTest(unittest.TestCase):
    """Casos de prueba para ValenceTest."""

    def test_reference_table(self):
        """Verifica reference table.

        Returns:
            None.

        """
        expected = {
            "C": 4, "N": 3, "O": 2, "S": 2, "P": 3,
            "Cl": 1, "Br": 1, "I": 1, "F": 1, "H": 1,
        }
        for element, value in expected.items():
            self.assertEqual(max_valence(element), value, element)

    def test_lookup_is_case_insensitive(self):
        self.assertEqual(max_valence("cl"), 1)
        self.assertEqual(max_valence("CL"), 1)
        self.assertTrue(is_known_element("bR"))

    def test_unknown_element_defaults_to_four(self):
        self.assertEqual(max_valence("Xx"), DEFAULT_MAX_VALENCE)
        self.assertEqual(max_valence("Si"), 4)
        self.assertFalse(is_known_element("Xx"))

    def test_current_valence_sums_bond_orders(self):
        """Verifica current valence sums bond orders.

        Returns:
            None.

        """
        graph = MolGraph()
        c = graph.add_atom("C", 0.0, 0.0)
        o = graph.add_atom("O", 40.0, 0.0)
        n = graph.add_atom("N", -40.0, 0.0)
        self.assertEqual(current_valence(graph, c.id), 0)

        graph.add_bond(c.id, o.id, 2)
        graph.add_bond(n.id, c.id, 1)

        self.assertEqual(current_valence(graph, c.id), 3)
        self.assertEqual(current_valence(graph, o.id), 2)
        self.assertEqual(current_valence(graph, 999), 0)

    def test_can_accept(self):
        graph = MolGraph()
        c = graph.add_atom("C", 0.0, 0.0)
        o = graph.add_atom("O", 40.0, 0.0)
        graph.add_bond(c.id, o.id, 1)

        self.assertTrue(can_accept(graph, c.id, 3))
        self.assertFalse(can_accept(graph, c.id, 4))
        self.assertTrue(can_accept(graph, o.id, 1))
        self.assertFalse(can_accept(graph, o.id, 2))
        self.assertFalse(can_accept(graph, 999, 1))

    def test_free_valence(self):
        graph = MolGraph()
        n = graph.add_atom("N", 0.0, 0.0)
        c = graph.add_atom("C", 40.0, 0.0)
        graph.add_bond(n.id, c.id, 3)

        self.assertEqual(free_valence(graph, n.id), 0)
        self.assertEqual(free_valence(graph, c.id), 1)
        self.assertEqual(free_valence(graph, 999), 0)


if __name__ == "__main__":
    unittest.main()
