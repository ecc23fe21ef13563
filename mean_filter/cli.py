"""
Interface de linha de comando do filtro de média.

Exemplo:
    $ mean-filter filter entrada.jpg 4
    $ mean-filter filter entrada.png 8 --kernel-size 5 --output saida.png
    $ mean-filter gui
"""
from __future__ import annotations

import logging
import sys
import time
from pathlib import Path
from typing import Optional

import typer

from .errors import MeanFilterError
from .image_io import read_image, write_image
from .parallel import apply_filter

logger = logging.getLogger(__name__)

DEFAULT_KERNEL_SIZE = 7
DEFAULT_OUTPUT = "filtered_output.jpg"

app = typer.Typer(
    name="mean-filter",
    help="Filtro de média (box filter) paralelo para imagens RGB",
    no_args_is_help=True,
)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command(name="filter", help="Aplica o filtro de média em um arquivo de imagem")
def filter_command(
    input_file: Path = typer.Argument(..., help="Imagem de entrada (JPG, PNG, ...)"),
    workers: int = typer.Argument(..., help="Número de faixas processadas em paralelo"),
    kernel_size: int = typer.Option(
        DEFAULT_KERNEL_SIZE, "--kernel-size", "-k", help="Lado da janela de média"
    ),
    output: Path = typer.Option(
        Path(DEFAULT_OUTPUT), "--output", "-o", help="Arquivo de saída"
    ),
    max_threads: Optional[int] = typer.Option(
        None, "--max-threads", help="Teto de threads do pool"
    ),
    max_dimension: Optional[int] = typer.Option(
        None, "--max-dimension", help="Reduz a imagem se o maior lado passar disso"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log detalhado"),
) -> None:
    _setup_logging(verbose)

    try:
        image = read_image(input_file, max_dimension=max_dimension)
        start = time.perf_counter()
        filtered = apply_filter(image, kernel_size, workers, max_threads=max_threads)
        elapsed = time.perf_counter() - start
        # Só grava depois que todas as faixas terminaram com sucesso.
        write_image(output, filtered)
    except MeanFilterError as exc:
        typer.echo(f"Erro ao processar imagem: {exc}", err=True)
        raise typer.Exit(1)

    typer.echo(f"Imagem filtrada salva em {output} ({elapsed:.2f}s)")


@app.command(name="gui", help="Abre a interface gráfica")
def gui_command() -> None:
    from .app import MeanFilterApp

    MeanFilterApp().mainloop()


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        print("\nOperação cancelada pelo usuário.")
        sys.exit(130)
