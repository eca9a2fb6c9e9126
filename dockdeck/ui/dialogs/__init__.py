"""Пакет диалоговых окон."""

from .container_details import ContainerDetailsDialog

__all__ = [
    "ContainerDetailsDialog",
]
