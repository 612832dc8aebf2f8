"""
Iconos de la barra de herramientas de Bosquejo.

Todos se pintan con QPainter sobre un pixmap transparente; los enlaces
reutilizan `core.geom.bond_strokes` para verse igual que en el lienzo.
"""
from PyQt6.QtGui import QIcon, QPixmap, QPainter, QColor, QPen, QFont, QBrush
from PyQt6.QtCore import Qt, QPointF, QRectF

from core.geom import bond_strokes
from gui.style import ELEMENT_COLORS

ICON_SIZE = 32
INK = "#2B2B2B"


def _blank_pixmap():
    pixmap = QPixmap(ICON_SIZE, ICON_SIZE)
    pixmap.fill(Qt.GlobalColor.transparent)
    painter = QPainter(pixmap)
    painter.setRenderHint(QPainter.RenderHint.Antialiasing)
    return pixmap, painter


def _ink_pen(width: float) -> QPen:
    pen = QPen(QColor(INK), width)
    pen.setCapStyle(Qt.PenCapStyle.RoundCap)
    return pen


def draw_glyph_icon(symbol: str) -> QIcon:
    """Símbolo del elemento con su color CPK."""
    pixmap, painter = _blank_pixmap()
    painter.setRenderHint(QPainter.RenderHint.TextAntialiasing)
    font = QFont("Arial")
    font.setPixelSize(18 if len(symbol) == 1 else 14)
    font.setBold(True)
    painter.setFont(font)
    painter.setPen(QColor(ELEMENT_COLORS.get(symbol, INK)))
    painter.drawText(QRectF(pixmap.rect()), Qt.AlignmentFlag.AlignCenter, symbol)
    painter.end()
    return QIcon(pixmap)


def draw_bond_icon(order: int = 1) -> QIcon:
    """Enlace en diagonal con tantos trazos como su orden."""
    pixmap, painter = _blank_pixmap()
    painter.setPen(_ink_pen(2.0))
    start = QPointF(7, ICON_SIZE - 7)
    end = QPointF(ICON_SIZE - 7, 7)
    for p1, p2 in bond_strokes(start, end, order, offset=4.0):
        painter.drawLine(p1, p2)
    painter.end()
    return QIcon(pixmap)


def draw_generic_icon(tool: str) -> QIcon:
    """Icono de herramienta: 'pointer' (selección) o 'eraser' (borrado)."""
    pixmap, painter = _blank_pixmap()
    if tool == "pointer":
        # Marco de selección punteado alrededor de un átomo.
        frame = QPen(QColor("#00BCD4"), 1.5, Qt.PenStyle.DashLine)
        painter.setPen(frame)
        painter.drawRect(QRectF(5, 5, 22, 22))
        painter.setPen(_ink_pen(1.5))
        painter.setBrush(QBrush(QColor("#FFFFFF")))
        painter.drawEllipse(QPointF(16, 16), 5, 5)
    elif tool == "eraser":
        # Átomo tachado.
        painter.setPen(_ink_pen(1.5))
        painter.setBrush(QBrush(QColor("#F5F5F5")))
        painter.drawEllipse(QPointF(16, 16), 9, 9)
        painter.setPen(QPen(QColor("#D32F2F"), 2.5))
        painter.drawLine(QPointF(8, 24), QPointF(24, 8))
    painter.end()
    return QIcon(pixmap)
