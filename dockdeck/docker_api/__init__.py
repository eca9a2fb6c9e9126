"""Тонкая обёртка над docker SDK: контейнеры, сети и граф зависимостей."""
