"""Pruebas unitarias para test_core_model."""

import os
import sys
import unittest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src")))

from core.model import MolGraph, MutationStatus, normalize_element


class MolGraphTest(unittest.TestCase):
    """Casos de prueba para MolGraphTest."""
    def test_add_atom_and_bond(self):
        """Verifica add atom and bond.

        Returns:
            None.

        """
        graph = MolGraph()
        a1 = graph.add_atom("C", 0.0, 0.0)
        a2 = graph.add_atom("O", 1.0, 0.0)
        bond = graph.add_bond(a1.id, a2.id, order=2)

        self.assertEqual(len(graph.atoms), 2)
        self.assertEqual(len(graph.bonds), 1)
        self.assertEqual(bond.order, 2)
        self.assertEqual((bond.a1_id, bond.a2_id), (a1.id, a2.id))

    def test_atom_ids_are_unique_and_not_reused(self):
        graph = MolGraph()
        a1 = graph.add_atom("C", 0.0, 0.0)
        graph.remove_atom(a1.id)
        a2 = graph.add_atom("C", 0.0, 0.0)
        self.assertNotEqual(a1.id, a2.id)

    def test_bond_ids_are_not_reused(self):
        graph = MolGraph()
        a1 = graph.add_atom("C", 0.0, 0.0)
        a2 = graph.add_atom("C", 40.0, 0.0)
        first = graph.add_bond(a1.id, a2.id)
        graph.remove_bond(first.id)
        second = graph.add_bond(a1.id, a2.id)
        self.assertNotEqual(first.id, second.id)

    def test_element_is_stored_canonically(self):
        """Verifica element is stored canonically.

        Returns:
            None.

        """
        graph = MolGraph()
        self.assertEqual(graph.add_atom("cl", 0.0, 0.0).element, "Cl")
        self.assertEqual(graph.add_atom("BR", 0.0, 0.0).element, "Br")
        self.assertEqual(normalize_element(" n "), "N")

    def test_non_finite_position_raises(self):
        graph = MolGraph()
        with self.assertRaises(ValueError):
            graph.add_atom("C", float("nan"), 0.0)
        with self.assertRaises(ValueError):
            graph.add_atom("C", 0.0, float("inf"))
        self.assertEqual(graph.atoms, {})

    def test_duplicate_bond_rejected_in_either_direction(self):
        """Verifica duplicate bond rejected in either direction.

        Returns:
            None.

        """
        graph = MolGraph()
        a1 = graph.add_atom("C", 0.0, 0.0)
        a2 = graph.add_atom("C", 40.0, 0.0)
        first = graph.add_bond(a1.id, a2.id, 1)
        before = dict(graph.bonds)

        self.assertIsNotNone(first)
        self.assertIsNone(graph.add_bond(a1.id, a2.id, 1))
        self.assertIsNone(graph.add_bond(a2.id, a1.id, 2))
        self.assertEqual(graph.bonds, before)
        self.assertEqual(graph.check_bond(a2.id, a1.id, 1), MutationStatus.DUPLICATE_BOND)

    def test_invalid_bonds_rejected(self):
        graph = MolGraph()
        a1 = graph.add_atom("C", 0.0, 0.0)
        a2 = graph.add_atom("C", 40.0, 0.0)

        self.assertIsNone(graph.add_bond(a1.id, a1.id))
        self.assertIsNone(graph.add_bond(a1.id, 999))
        self.assertIsNone(graph.add_bond(a1.id, a2.id, order=0))
        self.assertIsNone(graph.add_bond(a1.id, a2.id, order=4))
        self.assertEqual(graph.bonds, {})
        self.assertEqual(graph.check_bond(a1.id, a1.id), MutationStatus.SELF_BOND)
        self.assertEqual(graph.check_bond(a1.id, 999), MutationStatus.DANGLING_REFERENCE)
        self.assertEqual(graph.check_bond(a1.id, a2.id, 5), MutationStatus.INVALID_ORDER)

    def test_remove_atom_cascades_bonds(self):
        """Verifica remove atom cascades bonds.

        Returns:
            None.

        """
        graph = MolGraph()
        center = graph.add_atom("C", 0.0, 0.0)
        others = [graph.add_atom("C", float(k * 40), 40.0) for k in range(3)]
        for other in others:
            graph.add_bond(center.id, other.id)
        graph.add_bond(others[0].id, others[1].id)

        atom, removed = graph.remove_atom(center.id)

        self.assertEqual(atom.id, center.id)
        self.assertEqual(len(removed), 3)
        self.assertEqual(len(graph.bonds), 1)
        for bond in graph.bonds.values():
            self.assertFalse(bond.touches(center.id))

    def test_remove_missing_ids_is_noop(self):
        graph = MolGraph()
        graph.add_atom("C", 0.0, 0.0)
        self.assertIsNone(graph.remove_atom(42))
        self.assertIsNone(graph.remove_bond(42))
        self.assertEqual(len(graph.atoms), 1)

    def test_snapshot_is_read_only_and_stable(self):
        """Verifica snapshot is read only and stable.

        Returns:
            None.

        """
        graph = MolGraph()
        a1 = graph.add_atom("C", 0.0, 0.0)
        snapshot = graph.snapshot()
        graph.add_atom("O", 40.0, 0.0)
        graph.remove_atom(a1.id)

        self.assertEqual(list(snapshot.atoms), [a1.id])
        with self.assertRaises(TypeError):
            snapshot.atoms[99] = a1

    def test_bonds_of_and_neighbors(self):
        graph = MolGraph()
        a1 = graph.add_atom("C", 0.0, 0.0)
        a2 = graph.add_atom("C", 40.0, 0.0)
        a3 = graph.add_atom("C", 80.0, 0.0)
        graph.add_bond(a1.id, a2.id)
        graph.add_bond(a2.id, a3.id)

        self.assertEqual(sorted(graph.neighbors(a2.id)), [a1.id, a3.id])
        self.assertEqual(len(graph.bonds_of(a1.id)), 1)
        self.assertEqual(graph.snapshot().neighbor_positions(a1.id), [(40.0, 0.0)])

    def test_validate_flags_overvalent_carbon(self):
        """Verifica validate flags overvalent carbon.

        Returns:
            None.

        """
        graph = MolGraph()
        c = graph.add_atom("C", 0.0, 0.0)
        hs = [graph.add_atom("H", float(k), 1.0) for k in range(5)]
        for h in hs:
            graph.add_bond(c.id, h.id, order=1)
        self.assertEqual(graph.validate(), [c.id])

    def test_clear_resets_graph(self):
        graph = MolGraph()
        a1 = graph.add_atom("C", 0.0, 0.0)
        a2 = graph.add_atom("C", 1.0, 0.0)
        graph.add_bond(a1.id, a2.id)
        graph.clear()
        self.assertEqual(graph.atoms, {})
        self.assertEqual(graph.bonds, {})
        self.assertEqual(graph.add_atom("C", 0.0, 0.0).id, 1)


if __name__ == "__main__":
    unittest.main()
