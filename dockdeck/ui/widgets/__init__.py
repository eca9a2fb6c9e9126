"""Переиспользуемые виджеты."""
