"""
Representação de imagens RGB usada por todo o pacote.

RESUMO:
Uma imagem é uma lista de linhas, e cada linha é uma lista de pixels (R, G, B)
com canais de 8 bits (0..255). O acesso é sempre image[y][x].
Este módulo concentra as conversões (numpy <-> listas) e as validações de formato.
"""

from __future__ import annotations

from typing import List, Tuple

from .errors import ConfigurationError

Color = Tuple[int, int, int]
RGBImage = List[List[Color]]


def to_rgb_list(image) -> RGBImage:
    """Converte array numpy (H, W, 3) para lista de listas de tuplas RGB."""
    return [[(int(r), int(g), int(b)) for r, g, b in row] for row in image.tolist()]


def blank_image(height: int, width: int, value: Color = (0, 0, 0)) -> RGBImage:
    # Cada linha é uma lista independente: faixas diferentes nunca compartilham linha.
    return [[value for _ in range(width)] for _ in range(height)]


def image_size(image: RGBImage) -> Tuple[int, int]:
    """Retorna (largura, altura)."""
    height = len(image)
    width = len(image[0]) if height else 0
    return width, height


def validate_image(image: RGBImage) -> Tuple[int, int]:
    """
    Confere que a imagem é retangular, não vazia e com canais inteiros 0..255.

    Retorna (largura, altura). Lança ConfigurationError antes de qualquer
    processamento caso algo esteja fora do formato esperado.
    """
    if hasattr(image, "tolist"):
        raise ConfigurationError("Converta o array com to_rgb_list antes de filtrar.")
    if not isinstance(image, (list, tuple)) or (image and not isinstance(image[0], (list, tuple))):
        raise ConfigurationError("Imagem deve ser uma lista de linhas de pixels RGB.")

    width, height = image_size(image)
    if height < 1 or width < 1:
        raise ConfigurationError(f"Imagem vazia ({width}x{height}).")

    for y, row in enumerate(image):
        if not isinstance(row, (list, tuple)):
            raise ConfigurationError(f"Linha {y} não é uma lista de pixels: {row!r}")
        if len(row) != width:
            raise ConfigurationError(
                f"Linha {y} tem {len(row)} pixels, esperado {width}."
            )
        for x, pixel in enumerate(row):
            if not isinstance(pixel, (list, tuple)) or len(pixel) != 3:
                raise ConfigurationError(f"Pixel ({x}, {y}) não é RGB: {pixel!r}")
            for value in pixel:
                # bool é subclasse de int, mas não é um canal de 8 bits
                if isinstance(value, bool) or not isinstance(value, int):
                    raise ConfigurationError(
                        f"Canal não inteiro no pixel ({x}, {y}): {pixel!r}"
                    )
                if not 0 <= value <= 255:
                    raise ConfigurationError(
                        f"Canal fora de 0..255 no pixel ({x}, {y}): {pixel!r}"
                    )
    return width, height
