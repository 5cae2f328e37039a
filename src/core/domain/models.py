"""Modelos del dominio (Pydantic v2).

Incluye:
- Configuración de credenciales e identidad de la app.
- DTO de wire de `batchImport` (payload y envelope de respuesta).
- `TokenMappingResult`, un resultado por token APNs.
"""

from __future__ import annotations

import os

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from core.config import AppSettings
from core.domain.errors import NotConfiguredError

MAX_BATCH_SIZE = 100


class FCMConfiguration(BaseModel):
    """Configuración de credenciales compartida (solo lectura).

    Se pasa explícitamente al registrador; `None` significa que FCM nunca
    fue configurado.
    """

    model_config = ConfigDict(frozen=True)

    app_bundle_id: str = Field(
        ...,
        min_length=1,
        description="Bundle id por defecto de la app.",
    )
    server_key: str | None = Field(
        default=None,
        description="Server key por defecto (si no se pasa una explícita).",
    )
    sandbox: bool = Field(
        default=False,
        description="Entorno sandbox de APNs por defecto.",
    )

    @classmethod
    def from_settings(cls, settings: AppSettings) -> FCMConfiguration | None:
        if not settings.app_bundle_id:
            return None
        return cls(
            app_bundle_id=settings.app_bundle_id,
            server_key=settings.server_key or None,
            sandbox=settings.sandbox,
        )


class RegistrationIdentity(BaseModel):
    """Identidad reutilizable de una app para registrar tokens.

    Ejemplo::

        MY_APP = RegistrationIdentity(app_bundle_id="com.myapp")
        await registrar.register_identity(MY_APP, tokens)
    """

    model_config = ConfigDict(frozen=True)

    app_bundle_id: str = Field(..., min_length=1)
    server_key: str | None = None
    sandbox: bool = False

    @classmethod
    def from_env(cls) -> RegistrationIdentity:
        """Construye la identidad desde `FCM_APP_BUNDLE_ID` / `FCM_SERVER_KEY`."""

        app_bundle_id = os.environ.get("FCM_APP_BUNDLE_ID", "").strip()
        if not app_bundle_id:
            raise NotConfiguredError(
                "FCM: Register APNS: missing FCM_APP_BUNDLE_ID environment variable"
            )
        server_key = os.environ.get("FCM_SERVER_KEY", "").strip() or None
        return cls(app_bundle_id=app_bundle_id, server_key=server_key)


class RegistrationRequest(BaseModel):
    """Una llamada de registro ya validada (1..100 tokens)."""

    app_bundle_id: str = Field(..., min_length=1)
    server_key: str | None = None
    use_sandbox: bool = False
    tokens: list[str] = Field(..., min_length=1, max_length=MAX_BATCH_SIZE)


class TokenImportPayload(BaseModel):
    """Body JSON de `batchImport`."""

    application: str
    sandbox: bool
    apns_tokens: list[str]


class TokenMappingResult(BaseModel):
    """Resultado por token: APNs nativo -> registration token de FCM."""

    native_token: str = Field(..., description="Token APNs enviado.")
    provider_token: str = Field(..., description="Registration token devuelto por FCM.")
    is_registered: bool = Field(..., description="True si el proveedor devolvió status 'OK'.")


class ProviderResult(BaseModel):
    model_config = ConfigDict(extra="ignore")

    registration_token: str
    apns_token: str
    status: str


class ProviderResultEnvelope(BaseModel):
    """Respuesta 2xx de `batchImport`: `{"results": [...]}`."""

    model_config = ConfigDict(extra="ignore")

    results: list[ProviderResult]
