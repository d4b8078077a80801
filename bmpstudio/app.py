from __future__ import annotations

from typing import Optional

import customtkinter as ctk

from bmpstudio.config import AppConfig
from bmpstudio.controllers.app_controller import AppController
from bmpstudio.ui.bottom_bar import BottomBar
from bmpstudio.ui.image_viewer import ImageViewer
from bmpstudio.ui.sidebar import Sidebar


class BmpStudioApp(ctk.CTk):
    def __init__(self, config: Optional[AppConfig] = None) -> None:
        super().__init__()
        config = config or AppConfig()
        ctk.set_appearance_mode(config.appearance_mode)
        ctk.set_default_color_theme(config.color_theme)

        self.title(config.window_title)
        self.minsize(config.min_width, config.min_height)

        # root layout: left viewer, right sidebar, status/zoom bar below
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=0)

        self._viewer = ImageViewer(self)
        self._viewer.grid(row=0, column=0, sticky="nsew", padx=(12, 6), pady=(12, 6))

        self._sidebar = Sidebar(self, config=config)
        self._sidebar.grid(row=0, column=1, sticky="ns", padx=(6, 12), pady=(12, 6))

        self._bottom = BottomBar(self)
        self._bottom.grid(row=1, column=0, columnspan=2, sticky="ew", padx=12, pady=(0, 12))

        self._controller = AppController(viewer=self._viewer, sidebar=self._sidebar, bottom=self._bottom, window=self)
        self._controller.bind_events()

    def open_initial(self, file_path: str) -> None:
        self._controller.open_path(file_path)
