"""QSS-шаблоны тем и их применение."""
