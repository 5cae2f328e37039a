"""Modelos del dominio (Pydantic v2) y jerarquía de errores.

El dominio no conoce HTTP ni CLI: solo conceptos del problema.
"""
