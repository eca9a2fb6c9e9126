"""Строки интерфейса (en, pt)."""
