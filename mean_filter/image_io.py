"""Leitura e gravação de arquivos de imagem (OpenCV para ler, Pillow para gravar)."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

import cv2
import numpy as np
from PIL import Image

from .errors import ImageIOError
from .utils import RGBImage, image_size, to_rgb_list

logger = logging.getLogger(__name__)

# Limite usado pela interface gráfica para acelerar o processamento (opcional)
MAX_DIMENSION = 600
# Qualidade JPEG fixa escolhida para este projeto
JPEG_QUALITY = 90

PathLike = Union[str, Path]


def resize_if_needed(image: np.ndarray, max_dimension: int = MAX_DIMENSION) -> np.ndarray:
    h, w = image.shape[:2]
    if max(h, w) > max_dimension:
        scale = max_dimension / max(h, w)
        new_w, new_h = max(1, int(w * scale)), max(1, int(h * scale))
        return cv2.resize(image, (new_w, new_h), interpolation=cv2.INTER_AREA)
    return image


def read_image(path: PathLike, max_dimension: Optional[int] = None) -> RGBImage:
    """
    Lê um arquivo (JPG, PNG, BMP, TIFF...) como imagem RGB.

    O OpenCV devolve os canais em ordem BGR, então convertemos para RGB.
    Canal alfa, se existir, é descartado.
    """
    path = Path(path)
    if not path.is_file():
        raise ImageIOError(f"Arquivo não encontrado: {path}")

    image = cv2.imread(str(path), cv2.IMREAD_COLOR)
    if image is None:
        raise ImageIOError(f"Não foi possível decodificar a imagem: {path}")

    image = cv2.cvtColor(image, cv2.COLOR_BGR2RGB)
    if max_dimension is not None:
        image = resize_if_needed(image, max_dimension)

    logger.debug("Lido %s (%dx%d)", path, image.shape[1], image.shape[0])
    return to_rgb_list(image)


def to_array(data: RGBImage) -> np.ndarray:
    """Converte a lista de linhas RGB para array uint8 de formato (H, W, 3)."""
    return np.array(data, dtype=np.uint8).reshape(len(data), len(data[0]), 3)


def rgb_to_image(data: RGBImage) -> Image.Image:
    width, height = image_size(data)
    # Flatten e garante que valores estão entre 0-255
    flat = bytes([int(max(0, min(255, val))) for row in data for pixel in row for val in pixel])
    return Image.frombytes("RGB", (width, height), flat)


def write_image(path: PathLike, data: RGBImage, quality: int = JPEG_QUALITY) -> Path:
    """
    Grava a imagem no formato indicado pela extensão do arquivo.

    JPEG sempre sai com qualidade fixa (`quality`).
    """
    path = Path(path)
    image = rgb_to_image(data)
    try:
        if path.suffix.lower() in (".jpg", ".jpeg"):
            # subsampling=0 → melhor qualidade de cor
            image.save(path, format="JPEG", quality=int(quality), subsampling=0)
        else:
            image.save(path)
    except (OSError, ValueError, KeyError) as exc:
        raise ImageIOError(f"Não foi possível gravar {path}: {exc}") from exc

    logger.debug("Gravado %s", path)
    return path
