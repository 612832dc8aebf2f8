"""Modelos de datos base del editor molecular Bosquejo.

Este módulo concentra las estructuras que representan el grafo molecular
(átomos y enlaces), el estado de la interfaz y los parámetros del motor de
edición. El resto de la aplicación (edición, gestos y GUI) interactúa con
estas clases para añadir, consultar y eliminar la química dibujada.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

from core.valence import max_valence

logger = logging.getLogger(__name__)

VALID_BOND_ORDERS = (1, 2, 3)


class MutationStatus(str, Enum):
    """Resultado de una mutación del grafo.

    Solo `OK` implica cambios; el resto son rechazos silenciosos.
    """
    OK = "ok"
    VALENCE_EXCEEDED = "valence_exceeded"
    DUPLICATE_BOND = "duplicate_bond"
    DANGLING_REFERENCE = "dangling_reference"
    SELF_BOND = "self_bond"
    INVALID_ORDER = "invalid_order"
    INVALID_POSITION = "invalid_position"
    NO_TARGET = "no_target"
    CANCELLED = "cancelled"
    IGNORED = "ignored"


class EditMode(str, Enum):
    """Modos de herramienta que la interfaz puede activar."""
    SELECT = "select"
    ATOM = "atom"
    ERASE = "erase"


class GrowthPolicy(str, Enum):
    """Criterio para crecer desde un átomo con un único enlace."""
    ZIGZAG = "zigzag"
    STRAIGHT = "straight"


def normalize_element(symbol: str) -> str:
    """Devuelve el símbolo en su forma canónica ("cl" -> "Cl")."""
    symbol = symbol.strip()
    if not symbol:
        return symbol
    return symbol[0].upper() + symbol[1:].lower()


@dataclass(frozen=True)
class Atom:
    """Representa un átomo en el grafo molecular."""
    id: int
    element: str
    x: float
    y: float


@dataclass(frozen=True)
class Bond:
    """Representa un enlace químico entre dos átomos."""
    id: int
    a1_id: int
    a2_id: int
    order: int = 1

    def touches(self, atom_id: int) -> bool:
        return self.a1_id == atom_id or self.a2_id == atom_id

    def other(self, atom_id: int) -> int:
        """Devuelve el extremo opuesto a `atom_id`."""
        return self.a2_id if self.a1_id == atom_id else self.a1_id


@dataclass(frozen=True)
class EditorSettings:
    """Parámetros geométricos y de interacción del motor de edición."""
    bond_length: float = 40.0
    atom_hit_radius: float = 15.0
    bond_hit_radius: float = 8.0
    drag_threshold: float = 5.0
    double_offset: float = 4.2
    growth_policy: GrowthPolicy = GrowthPolicy.ZIGZAG


@dataclass
class ChemState:
    """Estado químico activo en la interfaz."""
    active_mode: EditMode = EditMode.ATOM
    active_bond_order: int = 1
    default_element: str = "C"
    selected_atom: Optional[int] = None
    selected_bond: Optional[int] = None

    def clear_selection(self) -> None:
        self.selected_atom = None
        self.selected_bond = None


@dataclass(frozen=True)
class MolSnapshot:
    """Vista de solo lectura del grafo en un instante dado.

    Los átomos y enlaces son inmutables, así que basta con congelar los
    diccionarios para que la vista no cambie tras futuras mutaciones.
    """
    atoms: Mapping[int, Atom] = field(default_factory=lambda: MappingProxyType({}))
    bonds: Mapping[int, Bond] = field(default_factory=lambda: MappingProxyType({}))

    def bonds_of(self, atom_id: int) -> List[Bond]:
        return [bond for bond in self.bonds.values() if bond.touches(atom_id)]

    def neighbor_positions(self, atom_id: int) -> List[Tuple[float, float]]:
        """Posiciones de los vecinos enlazados a `atom_id`."""
        positions = []
        for bond in self.bonds_of(atom_id):
            other = self.atoms.get(bond.other(atom_id))
            if other is not None:
                positions.append((other.x, other.y))
        return positions


class MolGraph:
    """Grafo molecular mutable con operaciones de edición básicas.

    Las operaciones son atómicas: o se aplican completas o no modifican el
    grafo. La comprobación de valencias queda fuera de esta clase.
    """

    def __init__(self) -> None:
        """Inicializa el grafo vacío y contadores internos de IDs."""
        self.atoms: Dict[int, Atom] = {}
        self.bonds: Dict[int, Bond] = {}
        self._next_atom_id = 1
        self._next_bond_id = 1

    def add_atom(self, element: str, x: float, y: float) -> Atom:
        """Crea y registra un átomo en el grafo.

        Args:
            element: Símbolo del elemento químico (p. ej., "C", "cl").
            x: Posición X en coordenadas del lienzo.
            y: Posición Y en coordenadas del lienzo.

        Returns:
            El átomo creado y almacenado en el diccionario interno.

        Raises:
            ValueError: Si alguna coordenada no es finita.

        Side Effects:
            Incrementa el contador de IDs y modifica `self.atoms`.
        """
        x = float(x)
        y = float(y)
        if not (math.isfinite(x) and math.isfinite(y)):
            raise ValueError(f"Non-finite atom position: ({x}, {y})")
        atom = Atom(id=self._next_atom_id, element=normalize_element(element), x=x, y=y)
        self._next_atom_id += 1
        self.atoms[atom.id] = atom
        return atom

    def remove_atom(self, atom_id: int) -> Optional[Tuple[Atom, List[Bond]]]:
        """Elimina un átomo y todos los enlaces conectados.

        Args:
            atom_id: Identificador del átomo a eliminar.

        Returns:
            Una tupla con el átomo eliminado y la lista de enlaces removidos,
            o `None` si el átomo no existía.

        Side Effects:
            Modifica `self.atoms` y `self.bonds`, actualizando el grafo.
        """
        if atom_id not in self.atoms:
            return None
        removed_bonds = [
            self.bonds.pop(bond_id)
            for bond_id, bond in list(self.bonds.items())
            if bond.touches(atom_id)
        ]
        atom = self.atoms.pop(atom_id)
        return atom, removed_bonds

    def check_bond(self, a1_id: int, a2_id: int, order: int = 1) -> MutationStatus:
        """Indica si `add_bond` aceptaría el enlace y, si no, por qué.

        Args:
            a1_id: ID del primer átomo.
            a2_id: ID del segundo átomo.
            order: Orden de enlace propuesto.

        Returns:
            `MutationStatus.OK` o el motivo del rechazo.
        """
        if order not in VALID_BOND_ORDERS:
            return MutationStatus.INVALID_ORDER
        if a1_id not in self.atoms or a2_id not in self.atoms:
            return MutationStatus.DANGLING_REFERENCE
        if a1_id == a2_id:
            return MutationStatus.SELF_BOND
        if self.find_bond_between(a1_id, a2_id) is not None:
            return MutationStatus.DUPLICATE_BOND
        return MutationStatus.OK

    def add_bond(self, a1_id: int, a2_id: int, order: int = 1) -> Optional[Bond]:
        """Crea y registra un enlace entre dos átomos.

        No valida valencias: esa responsabilidad es de quien llama.

        Args:
            a1_id: ID del primer átomo.
            a2_id: ID del segundo átomo.
            order: Orden de enlace (1, 2, 3).

        Returns:
            El enlace creado, o `None` si se rechazó (átomo inexistente,
            enlace consigo mismo, par ya enlazado u orden inválido).

        Side Effects:
            Incrementa el contador de IDs y modifica `self.bonds`.
        """
        status = self.check_bond(a1_id, a2_id, order)
        if status is not MutationStatus.OK:
            logger.debug("Bond %s-%s rejected: %s", a1_id, a2_id, status.value)
            return None
        bond = Bond(id=self._next_bond_id, a1_id=a1_id, a2_id=a2_id, order=order)
        self._next_bond_id += 1
        self.bonds[bond.id] = bond
        return bond

    def remove_bond(self, bond_id: int) -> Optional[Bond]:
        """Elimina un enlace del grafo; no hace nada si no existe."""
        return self.bonds.pop(bond_id, None)

    def get_atom(self, atom_id: int) -> Atom:
        """Obtiene un átomo por ID.

        Raises:
            KeyError: Si el átomo no existe.
        """
        return self.atoms[atom_id]

    def get_bond(self, bond_id: int) -> Bond:
        """Obtiene un enlace por ID.

        Raises:
            KeyError: Si el enlace no existe.
        """
        return self.bonds[bond_id]

    def has_atom(self, atom_id: Optional[int]) -> bool:
        return atom_id is not None and atom_id in self.atoms

    def find_bond_between(self, a1_id: int, a2_id: int) -> Optional[Bond]:
        """Busca un enlace existente entre dos átomos.

        Args:
            a1_id: ID del primer átomo.
            a2_id: ID del segundo átomo.

        Returns:
            El enlace si existe, o `None` en caso contrario.
        """
        for bond in self.bonds.values():
            if {bond.a1_id, bond.a2_id} == {a1_id, a2_id}:
                return bond
        return None

    def bonds_of(self, atom_id: int) -> List[Bond]:
        """Enlaces que tocan `atom_id`, en orden de creación."""
        return [bond for bond in self.bonds.values() if bond.touches(atom_id)]

    def neighbors(self, atom_id: int) -> Iterator[int]:
        for bond in self.bonds_of(atom_id):
            yield bond.other(atom_id)

    def snapshot(self) -> MolSnapshot:
        """Devuelve una vista inmutable del estado actual."""
        return MolSnapshot(
            atoms=MappingProxyType(dict(self.atoms)),
            bonds=MappingProxyType(dict(self.bonds)),
        )

    def clear(self) -> None:
        """Elimina todos los átomos y enlaces del grafo.

        Side Effects:
            Limpia `self.atoms`, `self.bonds` y reinicia contadores.
        """
        self.atoms.clear()
        self.bonds.clear()
        self._next_atom_id = 1
        self._next_bond_id = 1

    def validate(self) -> List[int]:
        """Valida valencias máximas según `MAX_VALENCE_MAP`.

        Calcula la suma de órdenes de enlace por átomo y reporta aquellos
        que superan la valencia máxima permitida.

        Returns:
            Lista de IDs de átomos que exceden la valencia permitida.

        Side Effects:
            No tiene efectos laterales; solo calcula y devuelve resultados.
        """
        bond_order_sum: Dict[int, int] = {atom_id: 0 for atom_id in self.atoms}
        for bond in self.bonds.values():
            if bond.a1_id in bond_order_sum:
                bond_order_sum[bond.a1_id] += bond.order
            if bond.a2_id in bond_order_sum:
                bond_order_sum[bond.a2_id] += bond.order

        return [
            atom_id
            for atom_id, atom in self.atoms.items()
            if bond_order_sum[atom_id] > max_valence(atom.element)
        ]
