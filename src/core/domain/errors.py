"""Errores del dominio.

Dos familias:
- `RegistrationError`: fallos de una llamada concreta; el caller puede
  reaccionar (partir el lote, reintentar más tarde, etc.).
- `ConfigurationError`: errores de programación/configuración. La librería
  nunca los captura.

Los errores de transporte (`httpx.HTTPError`) se propagan tal cual.
"""

from __future__ import annotations

_PREFIX = "FCM: Register APNS: "


class FCMError(Exception):
    """Base de todos los errores. `reason` se expone tal cual."""

    status_code: int = 500

    def __init__(self, reason: str, *, status_code: int | None = None) -> None:
        super().__init__(reason)
        self.reason = reason
        if status_code is not None:
            self.status_code = status_code


class RegistrationError(FCMError):
    pass


class BatchTooLargeError(RegistrationError):
    def __init__(self, count: int) -> None:
        super().__init__(f"{_PREFIX}tokens count should be less or equal 100 (got {count})")
        self.count = count


class PayloadEncodingError(RegistrationError):
    def __init__(self, detail: str) -> None:
        super().__init__(f"{_PREFIX}unable to encode payload: {detail}")


class ProviderRejectedError(RegistrationError):
    """Status fuera de 2xx; `reason` es el body del proveedor, sin prefijo."""

    def __init__(self, reason: str, *, provider_status: int | None = None) -> None:
        super().__init__(reason)
        self.provider_status = provider_status


class ErrorResponseDecodeError(ProviderRejectedError):
    def __init__(self, *, provider_status: int | None = None) -> None:
        super().__init__(
            f"{_PREFIX}unable to decode error response",
            provider_status=provider_status,
        )


class MalformedResponseError(RegistrationError):
    status_code = 404

    def __init__(self) -> None:
        super().__init__(f"{_PREFIX}empty response")


class ConfigurationError(FCMError):
    pass


class MissingCredentialError(ConfigurationError):
    def __init__(self) -> None:
        super().__init__(f"{_PREFIX}Server Key is missing.")


class NotConfiguredError(ConfigurationError):
    pass
