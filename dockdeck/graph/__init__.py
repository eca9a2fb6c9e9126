"""Раскладка и стили графа зависимостей (без Qt)."""
