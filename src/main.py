"""Punto de entrada de la aplicación de dibujo molecular Bosquejo.

Este módulo configura el registro, inicializa PyQt6, carga la ventana
principal y arranca el bucle de eventos.
"""

import argparse
import logging
import sys
import os

# Aseguramos que Python encuentre los módulos dentro de `src` al ejecutar
# el archivo directamente.
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from PyQt6.QtWidgets import QApplication
from gui.main_window import BosquejoWindow


def setup_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser."""
    parser = argparse.ArgumentParser(description="Bosquejo molecular sketcher")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    return parser


def main(argv=None):
    """
    Arranca la aplicación Qt y muestra la ventana principal.

    Side Effects:
        Configura `logging`, crea la instancia de `QApplication`, muestra la
        ventana y entra en el bucle de eventos de Qt.
    """
    args, qt_args = setup_parser().parse_known_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    app = QApplication([sys.argv[0]] + qt_args)
    app.setApplicationName("Bosquejo")

    window = BosquejoWindow()
    window.show()

    sys.exit(app.exec())

if __name__ == "__main__":
    main()
