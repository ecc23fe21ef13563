"""
Box Filter (Mean Filter / Average Filter) para imagens RGB.

REFERENCIAL TEÓRICO GERAL:
[1] Gonzalez, R. C., & Woods, R. E. (2002). "Digital Image Processing".
    Prentice Hall. (Capítulo 3: Intensity Transformations and Spatial Filtering).
[2] McDonnell, M. J. (1981). "Box-filtering techniques".
    Computer Graphics and Image Processing, 17(1), 65-70.

RESUMO:
O filtro de média substitui cada pixel pela média aritmética dos pixels da vizinhança
quadrada (k x k) centrada nele, canal a canal (R, G e B separadamente).
Nas bordas a janela é TRUNCADA: vizinhos fora da imagem simplesmente não entram na
média (nada de replicar, espelhar ou preencher com zero). Por isso o divisor é a
quantidade de vizinhos válidos, e não k * k.
"""
from __future__ import annotations

import logging
import threading
from typing import List, Optional

from .bands import Band
from .errors import ConfigurationError, FilterCancelled
from .utils import Color, RGBImage, blank_image, image_size, validate_image

logger = logging.getLogger(__name__)


def validate_kernel_size(kernel_size: int) -> int:
    if isinstance(kernel_size, bool) or not isinstance(kernel_size, int):
        raise ConfigurationError(f"Tamanho do kernel deve ser inteiro (recebido {kernel_size!r}).")
    if kernel_size <= 0:
        raise ConfigurationError(f"Tamanho do kernel deve ser >= 1 (recebido {kernel_size}).")
    return kernel_size


def neighborhood_average(image: RGBImage, center_x: int, center_y: int, kernel_size: int) -> Color:
    """
    Calcula a cor média da vizinhança de um pixel.

    EXPLICAÇÃO:
    pad = k // 2 (divisão inteira). Um kernel par se comporta como o ímpar seguinte
    (k=2 -> pad=1, igual a k=3).

    Para cada deslocamento (dx, dy) em [-pad, pad] x [-pad, pad]:
        - se (x+dx, y+dy) está dentro da imagem, soma R, G, B e conta 1 vizinho;
        - caso contrário, ignora.

    Resultado: soma // contagem em cada canal (truncamento, sem arredondar).
    A contagem nunca é zero porque o próprio pixel central sempre está na imagem.
    """
    width, height = image_size(image)
    pad = kernel_size // 2

    red_sum = green_sum = blue_sum = 0
    pixel_count = 0

    for dy in range(-pad, pad + 1):
        y = center_y + dy
        if y < 0 or y >= height:
            continue
        row = image[y]
        for dx in range(-pad, pad + 1):
            x = center_x + dx
            if 0 <= x < width:
                r, g, b = row[x]
                red_sum += r
                green_sum += g
                blue_sum += b
                pixel_count += 1

    return (
        red_sum // pixel_count,
        green_sum // pixel_count,
        blue_sum // pixel_count,
    )


def filter_band(
    source: RGBImage,
    output_rows: List[List[Color]],
    kernel_size: int,
    band: Band,
    cancel_event: Optional[threading.Event] = None,
) -> Band:
    """
    Preenche as linhas de uma faixa da imagem de saída.

    `output_rows` é a fatia output[first_row:last_row]: as listas de linha são as
    mesmas da saída compartilhada, então escrever nelas escreve na imagem final,
    e o worker não tem como alcançar linhas de outra faixa.

    O cancelamento é verificado entre linhas.
    """
    if len(output_rows) != len(band):
        raise ValueError(
            f"Faixa {band.index} tem {len(band)} linhas, mas recebeu {len(output_rows)}."
        )

    width, _ = image_size(source)
    logger.debug("Faixa %d: linhas [%d, %d)", band.index, band.first_row, band.last_row)

    for offset, y in enumerate(band.rows()):
        if cancel_event is not None and cancel_event.is_set():
            raise FilterCancelled(f"Faixa {band.index} cancelada na linha {y}.")
        out_row = output_rows[offset]
        for x in range(width):
            out_row[x] = neighborhood_average(source, x, y, kernel_size)

    logger.debug("Faixa %d concluída", band.index)
    return band


def box_filter(image: RGBImage, size: int) -> RGBImage:
    """
    Aplica o Filtro de Média na imagem inteira, sem paralelismo.

    Equivale a apply_filter(image, size, 1): uma única faixa cobrindo [0, H).
    """
    validate_kernel_size(size)
    width, height = validate_image(image)

    output = blank_image(height, width)
    filter_band(image, output, size, Band(index=0, first_row=0, last_row=height))
    return output
