#!/usr/bin/env python

import logging
from typing import Optional

import flet as ft

from .controller import AppController, ClearAll, ClearOne, GraphRequested, Outcome, SearchRequested
from .data_analyzer import Catalog
from .plot_view import PLOT_SIZE, PlotView, fig_to_base64, render_figure

# --- Configuration ---
CONTROLS_HEIGHT = 160  # room kept below the graph for the input row and output area

logger = logging.getLogger(__name__)


class NameTrendsGUI:
    def __init__(self, page: ft.Page, catalog: Catalog):
        self.page = page
        self.page.title = "Baby Name Trends"
        self.page.window_width = PLOT_SIZE + 40
        self.page.window_height = PLOT_SIZE + CONTROLS_HEIGHT
        self.page.window_resizable = True
        self.page.theme_mode = ft.ThemeMode.LIGHT
        self.page.theme = ft.Theme(color_scheme_seed=ft.Colors.BLUE_GREY)

        self.plot_width, self.plot_height = PLOT_SIZE, PLOT_SIZE
        self.view = PlotView(on_change=self.redraw)
        self.controller = AppController(catalog, self.view)

        # --- UI Control References ---
        self.plot_image = ft.Image(src_base64=self._render(), width=self.plot_width, height=self.plot_height, fit=ft.ImageFit.FILL)
        self.status_text = ft.Text(f"{len(catalog):,} names loaded. Enter a name or a decade (e.g. 1950).")

        self.page.on_resized = self.on_resized
        self.build_ui()

    def build_ui(self):
        self.name_input = ft.TextField(label="Name or decade", width=180, on_submit=self.graph_clicked, border_color=ft.Colors.OUTLINE, focused_border_color=ft.Colors.PRIMARY, focused_border_width=2)
        self.search_output = ft.TextField(label="Search results", read_only=True, multiline=True, min_lines=2, max_lines=4, expand=True)
        buttons = ft.Row([
            self.name_input,
            ft.ElevatedButton("Graph", icon=ft.Icons.SHOW_CHART, on_click=self.graph_clicked),
            ft.ElevatedButton("Clear All", icon=ft.Icons.CLEAR_ALL, on_click=self.clear_all_clicked),
            ft.ElevatedButton("Clear One", icon=ft.Icons.REMOVE, on_click=self.clear_one_clicked),
            ft.ElevatedButton("Search", icon=ft.Icons.SEARCH, on_click=self.search_clicked),
        ], wrap=True)
        self.page.add(
            ft.Column([
                self.plot_image,
                buttons,
                ft.Row([self.search_output]),
                ft.Row([ft.Icon(ft.Icons.INFO_OUTLINE), self.status_text]),
            ], expand=True)
        )
        self.page.update()

    def _render(self) -> str:
        return fig_to_base64(render_figure(self.view.scene(self.plot_width, self.plot_height), self.plot_width, self.plot_height))

    def redraw(self, view: Optional[PlotView] = None):
        self.plot_image.src_base64 = self._render()
        self.plot_image.width, self.plot_image.height = self.plot_width, self.plot_height
        if self.plot_image.page: self.plot_image.update()

    def on_resized(self, e=None):
        width = int(self.page.width or PLOT_SIZE) - 40
        height = int(self.page.height or PLOT_SIZE + CONTROLS_HEIGHT) - CONTROLS_HEIGHT
        self.plot_width, self.plot_height = max(width, 200), max(height, 200)
        self.redraw()

    def graph_clicked(self, e=None): self.show_outcome(self.controller.dispatch(GraphRequested(self.name_input.value or "")))
    def clear_all_clicked(self, e=None): self.show_outcome(self.controller.dispatch(ClearAll()))
    def clear_one_clicked(self, e=None): self.show_outcome(self.controller.dispatch(ClearOne()))
    def search_clicked(self, e=None): self.show_outcome(self.controller.dispatch(SearchRequested(self.name_input.value or "")))

    def show_outcome(self, outcome: Outcome):
        if outcome.search_output is not None:
            self.search_output.value = outcome.search_output
        self.status_text.value = outcome.status
        self.status_text.color = ft.Colors.ERROR if outcome.alert else None
        self.page.update()


def main(page: ft.Page, catalog: Catalog):
    NameTrendsGUI(page, catalog)
