"""Resolución de credenciales para `batchImport`.

Precedencia:
1. Argumentos explícitos del caller.
2. Valores por defecto de `FCMConfiguration`.

Si la configuración nunca se inicializó:
- modo strict: `NotConfiguredError`.
- modo lenient: `None`, y el caller devuelve un resultado vacío.
"""

from __future__ import annotations

from dataclasses import dataclass

from core.domain.errors import MissingCredentialError, NotConfiguredError
from core.domain.models import FCMConfiguration


@dataclass(frozen=True)
class ResolvedCredentials:
    app_bundle_id: str
    server_key: str


def resolve_credentials(
    *,
    app_bundle_id: str | None,
    server_key: str | None,
    configuration: FCMConfiguration | None,
    strict: bool = True,
) -> ResolvedCredentials | None:
    if configuration is None:
        if strict:
            raise NotConfiguredError(
                "FCM not configured. Set FCM_APP_BUNDLE_ID or pass an FCMConfiguration."
            )
        return None

    key = server_key or configuration.server_key
    if not key:
        raise MissingCredentialError()

    return ResolvedCredentials(
        app_bundle_id=app_bundle_id or configuration.app_bundle_id,
        server_key=key,
    )
