"""Interfaz gráfica PyQt6 de Bosquejo."""
