"""Интерфейс PySide6."""
