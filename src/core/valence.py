"""Valencias máximas y comprobaciones que protegen cada mutación."""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict

if TYPE_CHECKING:
    from core.model import MolGraph

# Suma máxima de órdenes de enlace por elemento. Las claves son también los
# elementos que ofrece la paleta de la interfaz.
MAX_VALENCE_MAP: Dict[str, int] = {
    "C": 4,
    "N": 3,
    "O": 2,
    "S": 2,
    "P": 3,
    "Cl": 1,
    "Br": 1,
    "I": 1,
    "F": 1,
    "H": 1,
}

DEFAULT_MAX_VALENCE = 4

_LOOKUP = {symbol.lower(): value for symbol, value in MAX_VALENCE_MAP.items()}


def is_known_element(element: str) -> bool:
    return element.strip().lower() in _LOOKUP


def max_valence(element: str) -> int:
    """Valencia máxima del elemento (sin distinguir mayúsculas).

    Los símbolos desconocidos reciben `DEFAULT_MAX_VALENCE`.
    """
    return _LOOKUP.get(element.strip().lower(), DEFAULT_MAX_VALENCE)


def current_valence(graph: MolGraph, atom_id: int) -> int:
    """Suma de órdenes de los enlaces que tocan al átomo.

    Args:
        graph: Grafo molecular a consultar.
        atom_id: Identificador del átomo a evaluar.

    Returns:
        Suma de órdenes (0 si no tiene enlaces o no existe).

    Side Effects:
        No tiene efectos laterales.
    """
    bond_order_sum = 0
    for bond in graph.bonds.values():
        if bond.a1_id == atom_id or bond.a2_id == atom_id:
            bond_order_sum += bond.order
    return bond_order_sum


def can_accept(graph: MolGraph, atom_id: int, additional_order: int) -> bool:
    """Indica si el átomo admite `additional_order` sin superar su máximo.

    Args:
        graph: Grafo molecular a consultar.
        atom_id: Identificador del átomo.
        additional_order: Orden del enlace que se quiere añadir.

    Returns:
        `True` si la nueva suma no excede la valencia máxima; `False` si la
        excede o si el átomo no existe.
    """
    atom = graph.atoms.get(atom_id)
    if atom is None:
        return False
    return current_valence(graph, atom_id) + additional_order <= max_valence(atom.element)


def free_valence(graph: MolGraph, atom_id: int) -> int:
    """Capacidad de enlace restante del átomo (>= 0)."""
    atom = graph.atoms.get(atom_id)
    if atom is None:
        return 0
    return max(0, max_valence(atom.element) - current_valence(graph, atom_id))
