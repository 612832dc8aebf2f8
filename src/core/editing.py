"""Operaciones de edición con control de valencias.

`MoleculeEditor` es el único escritor del grafo: cada operación comprueba
valencias y referencias antes de tocar nada, de modo que o se aplica
completa o deja el grafo intacto. Los rechazos se devuelven como estado en
`EditResult`, nunca como excepciones.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional

from PyQt6.QtCore import QPointF

from core.geom import atom_at, bond_at, extension_position, growth_position, next_growth_angle
from core.model import EditorSettings, MolGraph, MolSnapshot, MutationStatus, VALID_BOND_ORDERS
from core.valence import can_accept, max_valence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EditResult:
    """Resultado de una operación de edición."""
    status: MutationStatus
    atom_id: Optional[int] = None
    bond_id: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.status is MutationStatus.OK


def _rejected(status: MutationStatus, operation: str) -> EditResult:
    logger.debug("%s rejected: %s", operation, status.value)
    return EditResult(status)


class MoleculeEditor:
    """Aplica las mutaciones del editor sobre un `MolGraph` propio."""

    def __init__(self, graph: Optional[MolGraph] = None, settings: Optional[EditorSettings] = None) -> None:
        self.graph = graph if graph is not None else MolGraph()
        self.settings = settings if settings is not None else EditorSettings()

    def snapshot(self) -> MolSnapshot:
        return self.graph.snapshot()

    def atom_at(self, pos: QPointF) -> Optional[int]:
        return atom_at(pos, self.graph.snapshot(), self.settings.atom_hit_radius)

    def bond_at(self, pos: QPointF) -> Optional[int]:
        return bond_at(pos, self.graph.snapshot(), self.settings.bond_hit_radius)

    def place_atom(self, pos: QPointF, element: str) -> EditResult:
        """Añade un átomo aislado en `pos`."""
        if not (math.isfinite(pos.x()) and math.isfinite(pos.y())):
            return _rejected(MutationStatus.INVALID_POSITION, "place_atom")
        atom = self.graph.add_atom(element, pos.x(), pos.y())
        logger.debug("Placed atom %s (%s) at (%.1f, %.1f)", atom.id, atom.element, atom.x, atom.y)
        return EditResult(MutationStatus.OK, atom_id=atom.id)

    def growth_angle(self, atom_id: int) -> float:
        """Ángulo en el que crecería un átomo nuevo desde `atom_id`."""
        snapshot = self.graph.snapshot()
        atom = snapshot.atoms[atom_id]
        neighbors = [QPointF(x, y) for x, y in snapshot.neighbor_positions(atom_id)]
        return next_growth_angle(QPointF(atom.x, atom.y), neighbors, self.settings.growth_policy)

    def grow(self, atom_id: int, order: int, element: str) -> EditResult:
        """Crea un átomo enlazado a `atom_id` en el ángulo de crecimiento.

        Args:
            atom_id: Átomo de origen.
            order: Orden del enlace nuevo.
            element: Elemento del átomo creado.

        Returns:
            `EditResult` con los IDs del átomo y enlace creados si `OK`.
        """
        status = self._check_new_neighbor(atom_id, order, element)
        if status is not MutationStatus.OK:
            return _rejected(status, "grow")
        origin = self.graph.get_atom(atom_id)
        angle = self.growth_angle(atom_id)
        target = growth_position(QPointF(origin.x, origin.y), angle, self.settings.bond_length)
        return self._commit_new_neighbor(atom_id, target, order, element, "grow")

    def extend(self, atom_id: int, target: QPointF, order: int, element: str) -> EditResult:
        """Crea un átomo hacia `target` a la longitud de enlace fija.

        Si `target` coincide con el origen se usa el ángulo de crecimiento.
        """
        if not (math.isfinite(target.x()) and math.isfinite(target.y())):
            return _rejected(MutationStatus.INVALID_POSITION, "extend")
        status = self._check_new_neighbor(atom_id, order, element)
        if status is not MutationStatus.OK:
            return _rejected(status, "extend")
        origin = self.graph.get_atom(atom_id)
        origin_pos = QPointF(origin.x, origin.y)
        position = extension_position(origin_pos, target, self.settings.bond_length)
        if position is None:
            position = growth_position(origin_pos, self.growth_angle(atom_id), self.settings.bond_length)
        return self._commit_new_neighbor(atom_id, position, order, element, "extend")

    def connect(self, a1_id: int, a2_id: int, order: int) -> EditResult:
        """Enlaza dos átomos existentes si ambos admiten el orden pedido."""
        status = self.graph.check_bond(a1_id, a2_id, order)
        if status is not MutationStatus.OK:
            return _rejected(status, "connect")
        if not (can_accept(self.graph, a1_id, order) and can_accept(self.graph, a2_id, order)):
            return _rejected(MutationStatus.VALENCE_EXCEEDED, "connect")
        bond = self.graph.add_bond(a1_id, a2_id, order)
        logger.debug("Connected %s-%s with order %s", a1_id, a2_id, order)
        return EditResult(MutationStatus.OK, bond_id=bond.id)

    def erase_atom(self, atom_id: int) -> EditResult:
        removed = self.graph.remove_atom(atom_id)
        if removed is None:
            return _rejected(MutationStatus.DANGLING_REFERENCE, "erase_atom")
        atom, bonds = removed
        logger.debug("Erased atom %s and %d bond(s)", atom.id, len(bonds))
        return EditResult(MutationStatus.OK, atom_id=atom.id)

    def erase_bond(self, bond_id: int) -> EditResult:
        bond = self.graph.remove_bond(bond_id)
        if bond is None:
            return _rejected(MutationStatus.DANGLING_REFERENCE, "erase_bond")
        logger.debug("Erased bond %s", bond.id)
        return EditResult(MutationStatus.OK, bond_id=bond.id)

    def erase_at(self, pos: QPointF) -> EditResult:
        """Borra el átomo bajo `pos` o, si no hay ninguno, el enlace."""
        atom_id = self.atom_at(pos)
        if atom_id is not None:
            return self.erase_atom(atom_id)
        bond_id = self.bond_at(pos)
        if bond_id is not None:
            return self.erase_bond(bond_id)
        return _rejected(MutationStatus.NO_TARGET, "erase_at")

    def _check_new_neighbor(self, atom_id: int, order: int, element: str) -> MutationStatus:
        if order not in VALID_BOND_ORDERS:
            return MutationStatus.INVALID_ORDER
        if not self.graph.has_atom(atom_id):
            return MutationStatus.DANGLING_REFERENCE
        if not can_accept(self.graph, atom_id, order):
            return MutationStatus.VALENCE_EXCEEDED
        # El átomo nuevo también debe poder sostener el enlace.
        if order > max_valence(element):
            return MutationStatus.VALENCE_EXCEEDED
        return MutationStatus.OK

    def _commit_new_neighbor(
        self, atom_id: int, position: QPointF, order: int, element: str, operation: str
    ) -> EditResult:
        atom = self.graph.add_atom(element, position.x(), position.y())
        bond = self.graph.add_bond(atom_id, atom.id, order)
        logger.debug(
            "%s: atom %s (%s) bonded to %s with order %s",
            operation,
            atom.id,
            atom.element,
            atom_id,
            order,
        )
        return EditResult(MutationStatus.OK, atom_id=atom.id, bond_id=bond.id)
