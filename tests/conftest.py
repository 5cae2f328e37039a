from __future__ import annotations

import json
from collections.abc import Callable

import httpx
import pytest

from core.config import AppSettings
from core.domain.models import FCMConfiguration
from core.services.token_registration import APNSTokenRegistrar


class FakeProvider:
    """Stand-in for the Instance ID service.

    Answers `batchImport` with one result per token; tokens starting with
    `bad` come back with a non-OK status. `respond` overrides the reply.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.respond: Callable[[httpx.Request], httpx.Response] | None = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.respond is not None:
            return self.respond(request)
        payload = json.loads(request.content)
        results = [
            {
                "registration_token": f"fcm-{token}",
                "apns_token": token,
                "status": "INVALID_ARGUMENT" if token.startswith("bad") else "OK",
            }
            for token in payload["apns_tokens"]
        ]
        return httpx.Response(200, json={"results": results})

    @property
    def last_payload(self) -> dict:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(
        _env_file=None,
        app_bundle_id="com.example.app",
        server_key="default-key",
        iid_url="https://iid.example.test/iid/v1:",
        strict=True,
    )


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def registrar(settings: AppSettings, provider: FakeProvider) -> APNSTokenRegistrar:
    return APNSTokenRegistrar(settings, transport=httpx.MockTransport(provider))


@pytest.fixture
def configuration() -> FCMConfiguration:
    return FCMConfiguration(app_bundle_id="com.example.app", server_key="default-key")
