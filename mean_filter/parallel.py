"""
Execução paralela do filtro de média por faixas de linhas.

RESUMO:
A altura da imagem é dividida em T faixas (bands.partition_rows). Cada faixa vira
uma tarefa num pool de threads de tamanho fixo; todas leem a imagem original
(compartilhada, somente leitura) e escrevem apenas nas suas próprias linhas da
imagem de saída. Como as faixas não se sobrepõem, nenhuma trava é necessária.

O resultado só é liberado depois que TODAS as tarefas terminam (barreira).
Se qualquer faixa falhar, a saída inteira é descartada.

Ciclo de vida do job:
    CONFIGURED -> DISPATCHED -> JOINED -> COMPLETE
    (erro ou cancelamento em qualquer faixa leva a FAILED)
"""
from __future__ import annotations

import enum
import logging
import os
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import List, Optional, Tuple

from .bands import Band, partition_rows
from .box_filter import filter_band, validate_kernel_size
from .errors import (
    ConfigurationError,
    FilterCancelled,
    FilterStateError,
    WorkerError,
)
from .utils import RGBImage, blank_image, validate_image

logger = logging.getLogger(__name__)

# Teto do pool: pedir 10 mil workers não cria 10 mil threads.
DEFAULT_MAX_THREADS = 32


class FilterState(enum.Enum):
    CONFIGURED = "configured"
    DISPATCHED = "dispatched"
    JOINED = "joined"
    COMPLETE = "complete"
    FAILED = "failed"


def pool_size(worker_count: int, max_threads: Optional[int] = None) -> int:
    """Número de threads efetivamente criadas para `worker_count` faixas."""
    if max_threads is None:
        max_threads = min(DEFAULT_MAX_THREADS, (os.cpu_count() or 1) * 4)
    if max_threads <= 0:
        raise ConfigurationError(f"max_threads deve ser >= 1 (recebido {max_threads}).")
    return min(worker_count, max_threads)


class MeanFilterJob:
    """Uma execução do filtro: valida, despacha as faixas, espera e entrega."""

    def __init__(
        self,
        source: RGBImage,
        kernel_size: int,
        worker_count: int,
        max_threads: Optional[int] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> None:
        validate_kernel_size(kernel_size)
        if isinstance(worker_count, bool) or not isinstance(worker_count, int):
            raise ConfigurationError(f"Número de workers deve ser inteiro (recebido {worker_count!r}).")
        self.width, self.height = validate_image(source)
        # Valida worker_count contra a altura antes de alocar qualquer coisa.
        self.bands: List[Band] = partition_rows(self.height, worker_count)
        self.threads = pool_size(worker_count, max_threads)

        self.source = source
        self.kernel_size = kernel_size
        self.worker_count = worker_count
        self.cancel_event = cancel_event

        self.state = FilterState.CONFIGURED
        self._output: Optional[RGBImage] = None
        self._futures: List[Tuple[Band, Future]] = []
        self._executor: Optional[ThreadPoolExecutor] = None
        self._started_at = 0.0

    def _set_state(self, state: FilterState) -> None:
        logger.debug("Job: %s -> %s", self.state.value, state.value)
        self.state = state

    def dispatch(self) -> None:
        if self.state is not FilterState.CONFIGURED:
            raise FilterStateError(f"dispatch() chamado no estado {self.state.value}.")

        self._output = blank_image(self.height, self.width)
        self._started_at = time.perf_counter()
        logger.info(
            "Filtrando %dx%d com kernel %d em %d faixas (%d threads)",
            self.width,
            self.height,
            self.kernel_size,
            len(self.bands),
            self.threads,
        )

        self._executor = ThreadPoolExecutor(
            max_workers=self.threads, thread_name_prefix="mean-filter"
        )
        for band in self.bands:
            band_rows = self._output[band.first_row : band.last_row]
            future = self._executor.submit(
                filter_band,
                self.source,
                band_rows,
                self.kernel_size,
                band,
                self.cancel_event,
            )
            self._futures.append((band, future))
        self._set_state(FilterState.DISPATCHED)

    def join(self) -> None:
        """Barreira: espera todas as faixas; falha se qualquer uma falhou."""
        if self.state is not FilterState.DISPATCHED:
            raise FilterStateError(f"join() chamado no estado {self.state.value}.")

        try:
            wait([future for _, future in self._futures])
        finally:
            self._executor.shutdown(wait=True)
            self._executor = None

        # Barreira cumprida: todas as faixas pararam, com ou sem erro.
        # Só a partir daqui os resultados das faixas podem ser conferidos.
        self._set_state(FilterState.JOINED)
        failures = [(band, future.exception()) for band, future in self._futures]
        failures = [(band, exc) for band, exc in failures if exc is not None]

        if failures:
            self._set_state(FilterState.FAILED)
            self._output = None

            cancelled = [exc for _, exc in failures if isinstance(exc, FilterCancelled)]
            errors = [(band, exc) for band, exc in failures if not isinstance(exc, FilterCancelled)]
            for band, exc in errors:
                logger.error(
                    "Faixa %d [%d, %d) falhou: %s",
                    band.index,
                    band.first_row,
                    band.last_row,
                    exc,
                )
            if errors:
                band, exc = errors[0]
                raise WorkerError(
                    f"{len(errors)} de {len(self.bands)} faixas falharam; "
                    f"primeira: faixa {band.index} ({exc})",
                    band=band,
                ) from exc
            raise FilterCancelled(
                f"Filtro cancelado ({len(cancelled)} de {len(self.bands)} faixas interrompidas)."
            ) from cancelled[0]

        self._set_state(FilterState.COMPLETE)
        logger.info("Filtro concluído em %.3fs", time.perf_counter() - self._started_at)

    def result(self) -> RGBImage:
        if self.state is not FilterState.COMPLETE:
            raise FilterStateError(f"Resultado indisponível no estado {self.state.value}.")
        return self._output

    def run(self) -> RGBImage:
        self.dispatch()
        self.join()
        return self.result()


def apply_filter(
    source: RGBImage,
    kernel_size: int,
    worker_count: int,
    max_threads: Optional[int] = None,
    cancel_event: Optional[threading.Event] = None,
) -> RGBImage:
    """
    Aplica o filtro de média com `worker_count` faixas processadas em paralelo.

    O resultado é idêntico bit a bit para qualquer número de workers.
    Lança ConfigurationError (antes de qualquer trabalho), WorkerError ou
    FilterCancelled; nunca devolve uma imagem parcialmente filtrada.
    """
    job = MeanFilterJob(
        source,
        kernel_size,
        worker_count,
        max_threads=max_threads,
        cancel_event=cancel_event,
    )
    return job.run()
