#!/usr/bin/env python

from typing import Optional, Sequence

from rich.markup import escape
from textual.app import App, ComposeResult
from textual.containers import Container, Horizontal
from textual.widgets import Button, Footer, Header, Input, Static
from textual_plotext import PlotextPlot

from .controller import AppController, ClearAll, ClearOne, Command, GraphRequested, Outcome, SearchRequested
from .data_analyzer import Catalog
from .plot_view import PLOT_SIZE, Line, PlotView, Primitive


def draw_scene(plt, scene: Sequence[Primitive], width: int = PLOT_SIZE, height: int = PLOT_SIZE) -> None:
    """Draws a scene on a plotext canvas. plotext's y axis points up, so y is flipped."""
    plt.clear_data()
    plt.xlim(0, width)
    plt.ylim(0, height)
    plt.xticks([])
    plt.yticks([])
    for item in scene:
        if isinstance(item, Line):
            plt.plot([item.x1, item.x2], [height - item.y1, height - item.y2], color=item.color, marker="braille")
        else:
            plt.text(item.text, item.x, height - item.y, color=item.color)


class NameTrendsApp(App):
    """A Textual app to graph name rank trends."""

    TITLE = "Baby Name Trends"

    CSS = """
    #plot_view {
        height: 1fr;
    }
    #controls {
        height: auto;
        padding: 0 1;
    }
    #controls Input {
        width: 30;
    }
    #controls Button {
        margin-left: 1;
    }
    #search-container, #status-container {
        border: round $panel-lighten-1;
        border-title-color: $accent;
        padding: 0 1;
        height: 5;
    }
    """

    BINDINGS = [
        ("d", "toggle_dark", "Toggle dark mode"),
        ("ctrl+l", "clear_all", "Clear All"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, catalog: Catalog):
        super().__init__()
        self.catalog = catalog
        self.view = PlotView(on_change=self.redraw)
        self.controller = AppController(catalog, self.view)
        self.status_widget = Static(f"{len(catalog):,} names loaded. Enter a name or a decade (e.g. 1950).")
        self.search_output = Static("", id="search_output")

    def compose(self) -> ComposeResult:
        yield Header()
        yield PlotextPlot(id="plot_view")
        with Horizontal(id="controls"):
            yield Input(placeholder="Name or decade...", id="name_input")
            yield Button("Graph", variant="primary", id="graph_button")
            yield Button("Clear All", id="clear_all_button")
            yield Button("Clear One", id="clear_one_button")
            yield Button("Search", variant="success", id="search_button")
        with Container(id="search-container"):
            yield self.search_output
        with Container(id="status-container"):
            yield self.status_widget
        yield Footer()

    def on_mount(self) -> None:
        self.query_one("#search-container").border_title = "Search Results"
        self.query_one("#status-container").border_title = "Status"
        self.redraw()

    def redraw(self, view: Optional[PlotView] = None) -> None:
        plot = self.query_one(PlotextPlot)
        draw_scene(plot.plt, self.view.scene())
        plot.refresh()

    def _input_text(self) -> str:
        return self.query_one("#name_input", Input).value

    def run_command(self, command: Command) -> None:
        self.show_outcome(self.controller.dispatch(command))

    def show_outcome(self, outcome: Outcome) -> None:
        if outcome.search_output is not None:
            self.search_output.update(escape(outcome.search_output))
        if outcome.alert:
            self.bell()
            self.status_widget.update(f"[bold red]{escape(outcome.status)}[/]")
        else:
            self.status_widget.update(escape(outcome.status))

    def action_clear_all(self) -> None:
        self.run_command(ClearAll())

    def on_button_pressed(self, event: Button.Pressed) -> None:
        commands = {
            "graph_button": lambda: GraphRequested(self._input_text()),
            "clear_all_button": ClearAll,
            "clear_one_button": ClearOne,
            "search_button": lambda: SearchRequested(self._input_text()),
        }
        make_command = commands.get(event.button.id)
        if make_command:
            self.run_command(make_command())

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "name_input":
            self.run_command(GraphRequested(event.value))
