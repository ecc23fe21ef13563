"""Interface gráfica com Threading para evitar congelamento."""
from __future__ import annotations

import logging
import threading
import tkinter as tk
from tkinter import filedialog, ttk

from PIL import Image, ImageTk

from .errors import FilterCancelled, MeanFilterError
from .image_io import MAX_DIMENSION, read_image, rgb_to_image, write_image
from .parallel import apply_filter
from .utils import RGBImage

logger = logging.getLogger(__name__)

KERNEL_SIZES = (3, 5, 7, 9, 13, 17)


class ImagePanel(ttk.Label):
    def __init__(self, master: tk.Widget, text: str) -> None:
        super().__init__(master, text=text, anchor="center")
        self.image = None

    def update_image(self, image: Image.Image) -> None:
        self.image = ImageTk.PhotoImage(image)
        self.configure(image=self.image, text="")

    def clear(self) -> None:
        self.image = None
        self.configure(image="", text="Sem imagem")


class MeanFilterApp(tk.Tk):
    def __init__(self) -> None:
        super().__init__()
        self.title("Filtro de Média Paralelo")
        self.geometry("1200x700")

        self.source: RGBImage | None = None
        self.filtered: RGBImage | None = None
        self.cancel_event: threading.Event | None = None

        self._build_controls()

        panels = ttk.Frame(self)
        panels.pack(fill="both", expand=True)
        self.original_panel = ImagePanel(panels, "Original")
        self.filtered_panel = ImagePanel(panels, "Filtrada")
        for p in (self.original_panel, self.filtered_panel):
            p.pack(side="left", expand=True, fill="both", padx=5)

        # Barra de status
        self.status_var = tk.StringVar(value="Pronto.")
        self.status_bar = ttk.Label(self, textvariable=self.status_var, relief=tk.SUNKEN, anchor="w")
        self.status_bar.pack(side=tk.BOTTOM, fill=tk.X)

    def _build_controls(self) -> None:
        control = ttk.Frame(self)
        control.pack(fill="x", pady=5)

        ttk.Button(control, text="Carregar", command=self._load).pack(side="left", padx=5)

        ttk.Label(control, text="Kernel:").pack(side="left", padx=(15, 2))
        self.kernel_var = tk.IntVar(value=7)
        ttk.Combobox(
            control,
            textvariable=self.kernel_var,
            values=KERNEL_SIZES,
            width=5,
            state="readonly",
        ).pack(side="left")

        ttk.Label(control, text="Workers:").pack(side="left", padx=(15, 2))
        self.workers_var = tk.IntVar(value=4)
        ttk.Spinbox(control, from_=1, to=64, textvariable=self.workers_var, width=5).pack(side="left")

        self.run_button = ttk.Button(control, text="Processar", command=self._run_filter)
        self.run_button.pack(side="left", padx=15)
        ttk.Button(control, text="Cancelar", command=self._cancel).pack(side="left")
        ttk.Button(control, text="Salvar", command=self._save).pack(side="left", padx=15)

    def _load(self) -> None:
        path = filedialog.askopenfilename(
            title="Selecione uma imagem",
            filetypes=[("Imagens", "*.png *.jpg *.jpeg *.bmp *.tif *.tiff")],
        )
        if not path:
            return
        try:
            # Reduz tamanho para performance
            self.source = read_image(path, max_dimension=MAX_DIMENSION)
        except MeanFilterError as e:
            self.status_var.set(f"Erro: {e}")
            return

        self.filtered = None
        self.original_panel.update_image(rgb_to_image(self.source))
        self.filtered_panel.clear()
        self.status_var.set(f"Carregado: {path}")

    # --- UTILITÁRIO DE THREADING ---
    def _run_async(self, worker_func, update_func):
        """
        Executa worker_func em uma thread separada.
        Quando terminar, chama update_func na thread principal com o resultado.
        """
        self.config(cursor="watch") # Cursor de 'carregando'
        self.run_button.state(["disabled"])
        self.status_var.set("Processando... Aguarde (pode demorar em Python puro)...")
        self.update_idletasks() # Força atualização da UI

        def thread_target():
            try:
                result = worker_func()
            except MeanFilterError as e:
                logger.warning("Processamento falhou: %s", e)
                self.after(0, lambda error=e: self._on_process_error(error))
                return
            # Agenda a atualização da UI na thread principal
            self.after(0, lambda: self._on_process_complete(update_func, result))

        threading.Thread(target=thread_target, daemon=True).start()

    def _on_process_complete(self, update_func, result):
        self.config(cursor="") # Restaura cursor
        self.run_button.state(["!disabled"])
        self.status_var.set("Concluído.")
        update_func(result) # Atualiza a tela

    def _on_process_error(self, error):
        self.config(cursor="")
        self.run_button.state(["!disabled"])
        if isinstance(error, FilterCancelled):
            self.status_var.set("Cancelado.")
        else:
            self.status_var.set(f"Erro: {error}")

    def _run_filter(self) -> None:
        if self.source is None:
            self.status_var.set("Carregue uma imagem primeiro.")
            return

        image = self.source
        kernel_size = self.kernel_var.get()
        workers = self.workers_var.get()
        self.cancel_event = threading.Event()
        cancel_event = self.cancel_event

        def worker():
            return apply_filter(image, kernel_size, workers, cancel_event=cancel_event)

        def update_ui(result):
            self.filtered = result
            self.filtered_panel.update_image(rgb_to_image(result))

        self._run_async(worker, update_ui)

    def _cancel(self) -> None:
        if self.cancel_event is not None:
            self.cancel_event.set()

    def _save(self) -> None:
        if self.filtered is None:
            self.status_var.set("Nada para salvar.")
            return
        path = filedialog.asksaveasfilename(
            defaultextension=".jpg",
            filetypes=[("JPEG", "*.jpg"), ("PNG", "*.png")],
        )
        if not path:
            return
        try:
            write_image(path, self.filtered)
        except MeanFilterError as e:
            self.status_var.set(f"Erro: {e}")
            return
        self.status_var.set(f"Salvo em {path}")
