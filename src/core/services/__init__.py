"""Servicios del Core: validación, credenciales y orquestación del registro."""
