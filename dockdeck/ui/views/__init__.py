"""Экраны главного окна."""
