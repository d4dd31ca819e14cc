"""Taskpad - a terminal client for a personal remote task list."""

__version__ = "0.1.0"
