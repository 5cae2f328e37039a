"""Interfaces/abstracciones del Core (Protocol) que implementan los servicios."""
