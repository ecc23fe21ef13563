"""
Particionamento da imagem em faixas horizontais (bands).

RESUMO:
Cada worker recebe um intervalo contíguo de linhas [first_row, last_row).
As faixas cobrem [0, H) exatamente uma vez: todas têm H // T linhas, e a
última absorve o resto da divisão.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List

from .errors import ConfigurationError


@dataclass(frozen=True)
class Band:
    index: int
    first_row: int
    last_row: int

    def __len__(self) -> int:
        return self.last_row - self.first_row

    def rows(self) -> range:
        return range(self.first_row, self.last_row)


def partition_rows(height: int, worker_count: int) -> List[Band]:
    """
    Divide a altura da imagem em `worker_count` faixas contíguas.

    EXEMPLO (H=10, T=3):
        base = 10 // 3 = 3
        faixa 0 -> [0, 3)
        faixa 1 -> [3, 6)
        faixa 2 -> [6, 10)   (a última recebe a linha que sobrou)

    Mais workers do que linhas deixaria faixas vazias, então é rejeitado.
    """
    if worker_count <= 0:
        raise ConfigurationError(f"Número de workers deve ser >= 1 (recebido {worker_count}).")
    if height <= 0:
        raise ConfigurationError(f"Altura da imagem deve ser >= 1 (recebido {height}).")
    if worker_count > height:
        raise ConfigurationError(
            f"Mais workers ({worker_count}) do que linhas na imagem ({height})."
        )

    base = height // worker_count
    bands: List[Band] = []
    for i in range(worker_count):
        first_row = i * base
        if i == worker_count - 1:
            last_row = height
        else:
            last_row = base * (i + 1)
        bands.append(Band(index=i, first_row=first_row, last_row=last_row))
    return bands
