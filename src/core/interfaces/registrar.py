"""Contrato del registrador de tokens APNs (Protocol estructural)."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from core.domain.models import TokenMappingResult


@runtime_checkable
class TokenRegistrar(Protocol):
    """Contrato mínimo para registrar tokens APNs en FCM.

    Reglas de diseño:
    - `register_tokens` es asíncrono: el único punto de suspensión es el
      round trip HTTP.
    - Devuelve un `TokenMappingResult` por token que reporte el proveedor.
    """

    async def register_tokens(
        self,
        app_bundle_id: str | None,
        tokens: Sequence[str],
        *,
        server_key: str | None = None,
        sandbox: bool = False,
    ) -> list[TokenMappingResult]:
        ...
