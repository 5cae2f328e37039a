"""Adaptador HTTP: `batchImport` del servicio Instance ID de Firebase.

Tres piezas, en orden:
- `build_batch_import_request`: payload JSON + headers de autorización.
- `dispatch`: ejecuta la request sobre un `httpx.AsyncClient` dado.
- `interpret_response`: clasifica la respuesta (resultados o error).

Wire:
    POST {iid_url}batchImport
    {"application": "...", "sandbox": false, "apns_tokens": ["..."]}
    -> {"results": [{"registration_token": "...", "apns_token": "...", "status": "OK"}]}
"""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from core.domain.errors import (
    ErrorResponseDecodeError,
    MalformedResponseError,
    PayloadEncodingError,
    ProviderRejectedError,
)
from core.domain.models import (
    ProviderResultEnvelope,
    RegistrationRequest,
    TokenImportPayload,
    TokenMappingResult,
)

logger = logging.getLogger(__name__)

BATCH_IMPORT_PATH = "batchImport"


def batch_import_url(base_url: str) -> str:
    """`https://iid.googleapis.com/iid/v1:` -> `.../iid/v1:batchImport`.

    Bases que no terminan en `:` se unen con `/`.
    """

    if base_url.endswith(":"):
        return base_url + BATCH_IMPORT_PATH
    return f"{base_url.rstrip('/')}/{BATCH_IMPORT_PATH}"


def build_payload(request: RegistrationRequest) -> TokenImportPayload:
    # `sandbox` se envía siempre como false, independientemente de
    # `request.use_sandbox`. Ver DESIGN.md (open questions).
    return TokenImportPayload(
        application=request.app_bundle_id,
        sandbox=False,
        apns_tokens=list(request.tokens),
    )


def build_batch_import_request(
    client: httpx.AsyncClient,
    request: RegistrationRequest,
    *,
    server_key: str,
    base_url: str,
) -> httpx.Request:
    """Construye la request sobre `client` (hereda sus headers por defecto)."""

    payload = build_payload(request)
    try:
        body = payload.model_dump_json().encode("utf-8")
    except ValueError as exc:
        raise PayloadEncodingError(str(exc)) from exc

    headers = {
        "Authorization": f"key={server_key}",
        "Content-Type": "application/json",
    }
    return client.build_request("POST", batch_import_url(base_url), headers=headers, content=body)


async def dispatch(client: httpx.AsyncClient, request: httpx.Request) -> httpx.Response:
    """Envía la request. Sin reintentos ni manejo de errores propio."""

    logger.debug("batchImport -> %s", request.url)
    response = await client.send(request)
    logger.debug("batchImport <- HTTP %s (%d bytes)", response.status_code, len(response.content))
    return response


def _error_reason(response: httpx.Response) -> str:
    raw = response.content
    if not raw:
        raise ErrorResponseDecodeError(provider_status=response.status_code)
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ErrorResponseDecodeError(provider_status=response.status_code) from exc


def interpret_response(response: httpx.Response) -> list[TokenMappingResult]:
    if not 200 <= response.status_code < 300:
        reason = _error_reason(response)
        raise ProviderRejectedError(reason, provider_status=response.status_code)

    if not response.content:
        raise MalformedResponseError()
    try:
        envelope = ProviderResultEnvelope.model_validate_json(response.content)
    except ValidationError as exc:
        raise MalformedResponseError() from exc

    return [
        TokenMappingResult(
            native_token=item.apns_token,
            provider_token=item.registration_token,
            is_registered=item.status == "OK",
        )
        for item in envelope.results
    ]
