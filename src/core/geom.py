"""
Utilidades geométricas para el motor de edición de Bosquejo.

Incluye funciones puras para ángulos de crecimiento, trazos de enlaces
múltiples y selección de átomos o enlaces bajo el puntero. Los ángulos se
expresan en radianes y en coordenadas de pantalla (Y crece hacia abajo).
"""
from __future__ import annotations

import math
from typing import Iterable, List, Optional, Sequence, Tuple

from PyQt6.QtCore import QPointF

from core.model import GrowthPolicy, MolSnapshot

TWO_PI = 2.0 * math.pi
ZIGZAG_OFFSET = 2.0 * math.pi / 3.0
_ANGLE_EPS = 1e-9

Segment = Tuple[QPointF, QPointF]


def normalize_angle(theta: float) -> float:
    """Normaliza un ángulo al rango (-pi, pi]."""
    theta = theta % TWO_PI
    if theta > math.pi:
        theta -= TWO_PI
    return theta


def angle_distance(a: float, b: float) -> float:
    """Distancia angular mínima entre dos ángulos."""
    diff = (a - b + math.pi) % TWO_PI - math.pi
    return abs(diff)


def direction_angle(p0: QPointF, p1: QPointF) -> float:
    """Ángulo de la dirección p0 -> p1 en coordenadas de pantalla."""
    return math.atan2(p1.y() - p0.y(), p1.x() - p0.x())


def growth_position(p0: QPointF, theta: float, length: float) -> QPointF:
    """Calcula el punto final desde un origen, ángulo y longitud."""
    return QPointF(p0.x() + math.cos(theta) * length, p0.y() + math.sin(theta) * length)


def choose_optimal_direction(angles: Iterable[float]) -> float:
    """Devuelve el punto medio del mayor hueco angular.

    Maximiza la distancia mínima a todas las direcciones dadas. Si varios
    huecos empatan, gana el punto medio de menor valor absoluto y, a igual
    valor absoluto, el menor ángulo.
    """
    ordered = sorted(a % TWO_PI for a in angles)
    if not ordered:
        return 0.0

    candidates: List[Tuple[float, float]] = []
    for i, start in enumerate(ordered):
        end = ordered[i + 1] if i + 1 < len(ordered) else ordered[0] + TWO_PI
        gap = end - start
        candidates.append((gap, normalize_angle(start + gap / 2.0)))

    best_gap = max(gap for gap, _ in candidates)
    tied = [mid for gap, mid in candidates if gap >= best_gap - _ANGLE_EPS]
    return min(tied, key=lambda mid: (round(abs(mid), 9), mid))


def next_growth_angle(
    origin: QPointF,
    neighbors: Sequence[QPointF],
    policy: GrowthPolicy = GrowthPolicy.ZIGZAG,
) -> float:
    """Ángulo en el que colocar un átomo nuevo enlazado a `origin`.

    Args:
        origin: Posición del átomo desde el que se crece.
        neighbors: Posiciones de los átomos ya enlazados al origen.
        policy: Criterio para el caso de un único enlace existente.

    Returns:
        Ángulo en radianes dentro de (-pi, pi].
    """
    if not neighbors:
        return 0.0

    existing = [direction_angle(origin, nbr) for nbr in neighbors]
    if len(existing) == 1:
        base = existing[0]
        if policy == GrowthPolicy.STRAIGHT:
            return normalize_angle(base + math.pi)
        candidate1 = normalize_angle(base + ZIGZAG_OFFSET)
        candidate2 = normalize_angle(base - ZIGZAG_OFFSET)
        # Mayor desplazamiento vertical; en empate, base - 120°.
        if abs(math.sin(candidate1)) > abs(math.sin(candidate2)) + _ANGLE_EPS:
            return candidate1
        return candidate2

    return choose_optimal_direction(existing)


def extension_position(origin: QPointF, target: QPointF, length: float) -> Optional[QPointF]:
    """Punto a `length` de `origin` en la dirección de `target`.

    Returns:
        El punto calculado, o `None` si `target` coincide con el origen.
    """
    dx = target.x() - origin.x()
    dy = target.y() - origin.y()
    dist = math.hypot(dx, dy)
    if dist <= 1e-6:
        return None
    return QPointF(origin.x() + dx / dist * length, origin.y() + dy / dist * length)


def double_bond_side(bond_theta: float, neighbor_angles: Iterable[float]) -> int:
    """Lado (+1/-1) del trazo interior de un enlace doble, o 0 si es simétrico.

    Cada vecino se proyecta sobre la normal del enlace; decide la mayoría de
    signos y, en empate, el vecino de mayor proyección.
    """
    projections = [math.sin(angle - bond_theta) for angle in neighbor_angles]
    projections = [p for p in projections if abs(p) > 1e-6]
    if not projections:
        return 0
    positive = sum(1 for p in projections if p > 0)
    negative = len(projections) - positive
    if positive != negative:
        return 1 if positive > negative else -1
    strongest = max(projections, key=abs)
    return 1 if strongest > 0 else -1


def bond_strokes(
    p1: QPointF,
    p2: QPointF,
    order: int,
    neighbor_angles: Iterable[float] = (),
    offset: float = 4.2,
    inner_trim: float = 0.0,
) -> List[Segment]:
    """Segmentos de línea con los que se dibuja un enlace.

    Args:
        p1: Posición del átomo inicial.
        p2: Posición del átomo final.
        order: Orden de enlace (1, 2, 3).
        neighbor_angles: Direcciones de los demás enlaces en ambos extremos,
            medidas desde el extremo compartido.
        offset: Separación perpendicular entre trazos.
        inner_trim: Acortamiento en cada extremo del trazo interior de un
            enlace doble.

    Returns:
        Lista de pares `(inicio, fin)`; vacía si el enlace tiene longitud 0.
    """
    dx = p2.x() - p1.x()
    dy = p2.y() - p1.y()
    length = math.hypot(dx, dy)
    if length <= 1e-6:
        return []
    ux = dx / length
    uy = dy / length
    nx = -uy  # Normal vector perpendicular to bond
    ny = ux

    def shifted(dist: float, trim: float = 0.0) -> Segment:
        """Copia del eje desplazada `dist` sobre la normal."""
        return (
            QPointF(p1.x() + nx * dist + ux * trim, p1.y() + ny * dist + uy * trim),
            QPointF(p2.x() + nx * dist - ux * trim, p2.y() + ny * dist - uy * trim),
        )

    centre = (QPointF(p1), QPointF(p2))
    if order <= 1:
        return [centre]
    if order == 2:
        side = double_bond_side(math.atan2(dy, dx), neighbor_angles)
        if side == 0:
            return [shifted(offset * 0.5), shifted(-offset * 0.5)]
        trim = max(0.0, min(inner_trim, length * 0.25))
        return [centre, shifted(offset * side, trim)]
    return [centre, shifted(offset), shifted(-offset)]


def neighbor_bond_angles(snapshot: MolSnapshot, bond_id: int) -> List[float]:
    """Direcciones de los otros enlaces que salen de los extremos de `bond_id`."""
    bond = snapshot.bonds.get(bond_id)
    if bond is None:
        return []
    angles = []
    for end_id in (bond.a1_id, bond.a2_id):
        end = snapshot.atoms.get(end_id)
        if end is None:
            continue
        for other_bond in snapshot.bonds_of(end_id):
            if other_bond.id == bond_id:
                continue
            other = snapshot.atoms.get(other_bond.other(end_id))
            if other is None:
                continue
            angles.append(math.atan2(other.y - end.y, other.x - end.x))
    return angles


def distance_point_to_segment(p: QPointF, a: QPointF, b: QPointF) -> float:
    """Distancia de un punto al segmento AB."""
    dx = b.x() - a.x()
    dy = b.y() - a.y()
    if dx == 0 and dy == 0:
        return math.hypot(p.x() - a.x(), p.y() - a.y())
    t = ((p.x() - a.x()) * dx + (p.y() - a.y()) * dy) / (dx * dx + dy * dy)
    t = max(0.0, min(1.0, t))
    proj = QPointF(a.x() + t * dx, a.y() + t * dy)
    return math.hypot(p.x() - proj.x(), p.y() - proj.y())


def closest_atom(
    pos: QPointF, atoms: Iterable[Tuple[int, float, float]], threshold: float
) -> Optional[int]:
    """Devuelve el ID del átomo más cercano por debajo de un umbral.

    A igual distancia se conserva el primero encontrado.
    """
    best_id = None
    best_dist = threshold
    for atom_id, x, y in atoms:
        dist = math.hypot(pos.x() - x, pos.y() - y)
        if dist < best_dist:
            best_id = atom_id
            best_dist = dist
    return best_id


def closest_bond(
    pos: QPointF,
    bonds: Iterable[Tuple[int, QPointF, QPointF]],
    threshold: float,
) -> Optional[int]:
    """Devuelve el ID del enlace más cercano por debajo de un umbral."""
    best_id = None
    best_dist = threshold
    for bond_id, a, b in bonds:
        dist = distance_point_to_segment(pos, a, b)
        if dist < best_dist:
            best_id = bond_id
            best_dist = dist
    return best_id


def atom_at(pos: QPointF, snapshot: MolSnapshot, radius: float) -> Optional[int]:
    """Átomo bajo `pos`, recorriendo los átomos en orden de creación."""
    return closest_atom(
        pos,
        ((atom.id, atom.x, atom.y) for atom in snapshot.atoms.values()),
        radius,
    )


def bond_at(pos: QPointF, snapshot: MolSnapshot, radius: float) -> Optional[int]:
    """Enlace bajo `pos`, medido contra el segmento entre sus átomos."""
    segments = []
    for bond in snapshot.bonds.values():
        a1 = snapshot.atoms.get(bond.a1_id)
        a2 = snapshot.atoms.get(bond.a2_id)
        if a1 is None or a2 is None:
            continue
        segments.append((bond.id, QPointF(a1.x, a1.y), QPointF(a2.x, a2.y)))
    return closest_bond(pos, segments, radius)
