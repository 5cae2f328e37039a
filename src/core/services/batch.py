"""Validación del lote de tokens antes de cualquier I/O."""

from __future__ import annotations

from collections.abc import Iterable

from core.domain.errors import BatchTooLargeError
from core.domain.models import MAX_BATCH_SIZE


def validate_batch(tokens: Iterable[str]) -> list[str]:
    """Devuelve los tokens como lista, en el mismo orden.

    - Más de 100 tokens -> `BatchTooLargeError`.
    - Lista vacía -> `[]` (el caller corta ahí, sin red).
    """

    batch = list(tokens)
    if len(batch) > MAX_BATCH_SIZE:
        raise BatchTooLargeError(len(batch))
    return batch


def split_batches(tokens: Iterable[str], size: int = MAX_BATCH_SIZE) -> list[list[str]]:
    """Parte una secuencia en lotes consecutivos de como mucho `size` tokens."""

    if size < 1 or size > MAX_BATCH_SIZE:
        raise ValueError(f"batch size must be between 1 and {MAX_BATCH_SIZE}")
    items = list(tokens)
    return [items[i : i + size] for i in range(0, len(items), size)]
