#!/usr/bin/env python

import logging
from dataclasses import dataclass
from typing import Optional, Union

from .data_analyzer import TOP_DECADE_NAMES, Catalog
from .plot_view import PlotState, PlotView

# --- Configuration ---
SEARCH_DELIMITER = ", "

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GraphRequested:
    text: str


@dataclass(frozen=True)
class ClearAll:
    pass


@dataclass(frozen=True)
class ClearOne:
    pass


@dataclass(frozen=True)
class SearchRequested:
    text: str


Command = Union[GraphRequested, ClearAll, ClearOne, SearchRequested]


@dataclass(frozen=True)
class Outcome:
    """
    Result of one user action.

    `search_output` is None when the output area should keep its text;
    `alert` marks input that could not be graphed.
    """
    state: PlotState
    search_output: Optional[str] = None
    alert: bool = False
    status: str = ""


def _graph(text: str, catalog: Catalog, state: PlotState) -> Outcome:
    if text in catalog.decade_years():
        top = catalog.top_n(int(text), TOP_DECADE_NAMES)
        for series in top:
            state = state.with_series(series)
        names = SEARCH_DELIMITER.join(series.name for series in top)
        return Outcome(state, status=f"Top names of the {text}s: {names}" if top else f"No ranked names in the {text}s")

    series = catalog.find_by_name(text)
    if series is None:
        suggestions = catalog.suggest(text)
        status = f"Name '{text}' not found."
        if suggestions:
            status += f" Did you mean: {SEARCH_DELIMITER.join(suggestions)}?"
        logger.info("Graph request not recognised: %r", text)
        return Outcome(state, alert=True, status=status)
    return Outcome(state.with_series(series), status=f"Graphing {series.name} (best year {series.best_year()})")


def handle(command: Command, catalog: Catalog, state: PlotState) -> Outcome:
    """Applies one command to the plot state without touching any widget."""
    if isinstance(command, GraphRequested):
        return _graph(command.text, catalog, state)
    if isinstance(command, ClearAll):
        return Outcome(state.cleared(), status="Graph cleared.")
    if isinstance(command, ClearOne):
        if not state.active:
            return Outcome(state, status="Nothing to clear.")
        return Outcome(state.without_earliest(), status=f"Removed {state.active[0].name}")
    if isinstance(command, SearchRequested):
        matches = [series.name for series in catalog.search(command.text)]
        return Outcome(state, search_output=SEARCH_DELIMITER.join(matches), status=f"{len(matches):,} names contain '{command.text}'")
    raise TypeError(f"Unknown command: {command!r}")


class AppController:
    """Routes UI commands to the catalog and applies the result to the plot view."""
    def __init__(self, catalog: Catalog, view: PlotView):
        self.catalog = catalog
        self.view = view

    def dispatch(self, command: Command) -> Outcome:
        logger.debug("Dispatching %r", command)
        outcome = handle(command, self.catalog, self.view.state)

        # Go through the view's mutators so unchanged states don't redraw.
        if isinstance(command, ClearAll):
            self.view.remove_all()
        elif isinstance(command, ClearOne):
            self.view.remove_earliest()
        else:
            for series in outcome.state.active:
                self.view.add_series(series)
        return outcome
