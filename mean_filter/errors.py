"""Exceções do filtro de média paralelo."""
from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .bands import Band


class MeanFilterError(Exception):
    """Base para todas as falhas do pacote."""


class ConfigurationError(MeanFilterError, ValueError):
    """Parâmetros inválidos (kernel, número de workers ou formato da imagem)."""


class WorkerError(MeanFilterError):
    """Um worker terminou com erro; a imagem de saída inteira é inválida."""

    def __init__(self, message: str, band: Optional["Band"] = None) -> None:
        super().__init__(message)
        self.band = band


class FilterCancelled(MeanFilterError):
    """O processamento foi cancelado antes de todas as faixas terminarem."""


class FilterStateError(MeanFilterError, RuntimeError):
    """Operação pedida num estado do job que não a permite."""


class ImageIOError(MeanFilterError, OSError):
    """Falha ao ler ou gravar um arquivo de imagem."""
