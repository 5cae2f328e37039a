"""Registro de tokens APNs en Firebase Cloud Messaging.

Flujo (cada etapa corta con error):
    validate_batch -> resolve_credentials -> build request -> dispatch -> interpret

Uso típico::

    registrar = APNSTokenRegistrar(AppSettings())
    results = await registrar.register_tokens("com.myapp", apns_tokens)

El "contexto de ejecución" es el event loop del caller más el
`httpx.AsyncClient` que se use: uno compartido (constructor o por llamada) o
uno efímero creado con `build_async_client`.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import httpx

from adapters.fcm_batch_import import build_batch_import_request, dispatch, interpret_response
from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.models import (
    FCMConfiguration,
    RegistrationIdentity,
    RegistrationRequest,
    TokenMappingResult,
)
from core.interfaces.registrar import TokenRegistrar
from core.services.batch import split_batches, validate_batch
from core.services.credentials import resolve_credentials

logger = logging.getLogger(__name__)


class APNSTokenRegistrar(TokenRegistrar):
    """Convierte tokens APNs nativos en registration tokens de FCM."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        configuration: FCMConfiguration | None = None,
        strict: bool | None = None,
        client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._configuration = configuration or FCMConfiguration.from_settings(self._settings)
        self._strict = self._settings.strict if strict is None else strict
        self._client = client
        self._transport = transport

    @property
    def configuration(self) -> FCMConfiguration | None:
        return self._configuration

    @property
    def strict(self) -> bool:
        return self._strict

    async def register_tokens(
        self,
        app_bundle_id: str | None,
        tokens: Sequence[str],
        *,
        server_key: str | None = None,
        sandbox: bool = False,
        client: httpx.AsyncClient | None = None,
    ) -> list[TokenMappingResult]:
        """Registra hasta 100 tokens y devuelve un resultado por token.

        `app_bundle_id`/`server_key` explícitos ganan sobre la configuración.
        El orden de los resultados lo decide el proveedor.
        """

        batch = validate_batch(tokens)
        if not batch:
            return []

        credentials = resolve_credentials(
            app_bundle_id=app_bundle_id,
            server_key=server_key,
            configuration=self._configuration,
            strict=self._strict,
        )
        if credentials is None:
            logger.debug("FCM not configured (lenient mode): skipping %d tokens", len(batch))
            return []

        request = RegistrationRequest(
            app_bundle_id=credentials.app_bundle_id,
            server_key=credentials.server_key,
            use_sandbox=sandbox,
            tokens=batch,
        )
        shared = client or self._client
        if shared is not None:
            response = await self._send(shared, request, credentials.server_key)
        else:
            async with build_async_client(self._settings, transport=self._transport) as owned:
                response = await self._send(owned, request, credentials.server_key)

        return interpret_response(response)

    async def _send(
        self,
        client: httpx.AsyncClient,
        request: RegistrationRequest,
        server_key: str,
    ) -> httpx.Response:
        http_request = build_batch_import_request(
            client,
            request,
            server_key=server_key,
            base_url=self._settings.iid_url,
        )
        return await dispatch(client, http_request)

    async def register_identity(
        self,
        identity: RegistrationIdentity,
        tokens: Sequence[str],
        *,
        client: httpx.AsyncClient | None = None,
    ) -> list[TokenMappingResult]:
        return await self.register_tokens(
            identity.app_bundle_id,
            tokens,
            server_key=identity.server_key,
            sandbox=identity.sandbox,
            client=client,
        )

    async def register_in_batches(
        self,
        app_bundle_id: str | None,
        tokens: Sequence[str],
        *,
        server_key: str | None = None,
        sandbox: bool = False,
        client: httpx.AsyncClient | None = None,
    ) -> list[TokenMappingResult]:
        """Parte `tokens` en lotes de 100 y los registra uno tras otro.

        El primer lote que falle propaga su error; no hay resultados parciales.
        """

        results: list[TokenMappingResult] = []
        for batch in split_batches(tokens):
            results.extend(
                await self.register_tokens(
                    app_bundle_id,
                    batch,
                    server_key=server_key,
                    sandbox=sandbox,
                    client=client,
                )
            )
        return results
