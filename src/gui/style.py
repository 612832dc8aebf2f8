"""
Drawing style presets for Bosquejo.
"""
from __future__ import annotations

from dataclasses import dataclass
from PyQt6.QtCore import Qt


# Colores de elementos (esquema CPK simplificado) para etiquetas.
ELEMENT_COLORS = {
    'C': '#333333',   # Carbon - dark gray
    'N': '#3050F8',   # Nitrogen - blue
    'O': '#FF0D0D',   # Oxygen - red
    'S': '#C8A000',   # Sulfur - dark yellow
    'P': '#FF8000',   # Phosphorus - orange
    'F': '#90E050',   # Fluorine - light green
    'Cl': '#1FF01F',  # Chlorine - green
    'Br': '#A62929',  # Bromine - dark red
    'I': '#940094',   # Iodine - purple
    'H': '#000000',   # Hydrogen - black
}


@dataclass(frozen=True)
class DrawingStyle:
    stroke_px: float
    bond_color: str
    atom_radius_px: float
    atom_fill_color: str
    atom_stroke_color: str
    selected_color: str
    hover_color: str
    preview_color: str
    inner_trim_px: float
    label_font_family: str
    label_font_size: float
    cap_style: Qt.PenCapStyle
    join_style: Qt.PenJoinStyle


CHEMDOODLE_LIKE = DrawingStyle(
    stroke_px=2.0,
    bond_color="#000000",
    atom_radius_px=10.0,
    atom_fill_color="#FFFFFF",
    atom_stroke_color="#333333",
    selected_color="#00BCD4",
    hover_color="#4A90D9",
    preview_color="#808080",
    inner_trim_px=5.0,
    label_font_family="Arial",
    label_font_size=11.0,
    cap_style=Qt.PenCapStyle.RoundCap,
    join_style=Qt.PenJoinStyle.RoundJoin,
)


TOOL_PALETTE_STYLESHEET = """
QToolBar {
    background-color: #F5F7FA;
    border: none;
    border-right: 1px solid #E0E4E8;
    spacing: 4px;
    padding: 6px 4px;
}

QToolButton {
    background-color: #FFFFFF;
    border: 1px solid #CFD8DC;
    border-radius: 4px;
    padding: 3px;
    margin: 1px;
}

QToolButton:hover {
    background-color: #E3F2FD;
}

QToolButton:checked {
    background-color: #B2EBF2;
    border: 1px solid #00BCD4;
}
"""
