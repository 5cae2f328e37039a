"""Configuración del Core (pydantic-settings, prefijo `FCM_`).

Variables principales:
- `FCM_APP_BUNDLE_ID`: bundle id de la app iOS registrada en Firebase.
- `FCM_SERVER_KEY`: server key (legacy) usada en `Authorization: key=...`.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "fcm-apns-bridge"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "fcm-apns-bridge"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "fcm-apns-bridge"
    return Path.home() / ".config" / "fcm-apns-bridge"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str | None]) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# fcm-apns-bridge user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Se resuelve una vez por proceso (o por cliente) y se trata como
    solo-lectura a partir de ahí.
    """

    model_config = SettingsConfigDict(
        env_prefix="FCM_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    app_bundle_id: str | None = Field(
        default=None,
        description="Bundle id de la app iOS (p.ej. 'com.example.app').",
    )
    server_key: str | None = Field(
        default=None,
        description="Server key de Firebase Cloud Messaging.",
    )
    sandbox: bool = Field(
        default=False,
        description="Tokens APNs emitidos por el entorno sandbox de Apple.",
    )
    iid_url: str = Field(
        default="https://iid.googleapis.com/iid/v1:",
        min_length=8,
        description="Base URL del servicio Instance ID (batch import).",
    )
    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="fcm-apns-bridge/0.1",
        min_length=1,
        description="User-Agent para peticiones al proveedor.",
    )
    strict: bool = Field(
        default=True,
        description="Falla si FCM no está configurado; en modo lenient devuelve lista vacía.",
    )
    log_level: str = Field(
        default="WARNING",
        description="Nivel de logging para la CLI.",
    )
