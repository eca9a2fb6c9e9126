"""Docker Deck: настольный менеджер контейнеров Docker."""

__version__ = "0.3.0"
