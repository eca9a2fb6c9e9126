"""Настройки приложения: группы, валидаторы, реестр и наблюдатели."""
