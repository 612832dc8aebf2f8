"""API pública del núcleo de edición de Bosquejo.

Reexpone el modelo, las operaciones de edición y la máquina de gestos para
facilitar importaciones.
"""

from core.model import (
    Atom,
    Bond,
    ChemState,
    EditMode,
    EditorSettings,
    GrowthPolicy,
    MolGraph,
    MolSnapshot,
    MutationStatus,
)
from core.editing import EditResult, MoleculeEditor
from core.gesture import DragSession, GestureController, GestureState

__all__ = [
    "Atom",
    "Bond",
    "ChemState",
    "DragSession",
    "EditMode",
    "EditResult",
    "EditorSettings",
    "GestureController",
    "GestureState",
    "GrowthPolicy",
    "MoleculeEditor",
    "MolGraph",
    "MolSnapshot",
    "MutationStatus",
]
