import matplotlib.pyplot as plt
import pytest

from name_trends.data_analyzer import DECADES, parse_line
from name_trends.plot_view import (
    PALETTE, SPACE, Label, Line, PlotState, PlotView, build_scene, color_for, fig_to_base64,
    rank_to_y, render_figure,
)

AVA = parse_line("Ava 5 3 0 1 2 4 6 7 8 9 10")
BOB = parse_line("Bob 1 2 3 4 5 6 7 8 9 10 11")
GRID_PRIMITIVES = 2 + 2 * DECADES
SERIES_PRIMITIVES = 1 + 2 * (DECADES - 1)


@pytest.fixture
def redraws():
    return []


@pytest.fixture
def view(redraws):
    return PlotView(on_change=redraws.append)

# --- Tests for the geometry functions ---

def test_rank_to_y_pins_unranked_to_bottom():
    bottom = 600 - SPACE
    assert rank_to_y(0, 600) == bottom
    assert rank_to_y(1000, 600) == bottom
    assert rank_to_y(5000, 600) == bottom

def test_rank_to_y_formula():
    """usable height 560: rank 500 lands halfway into the band."""
    assert rank_to_y(1, 600) == 19
    assert rank_to_y(500, 600) == 299
    assert rank_to_y(999, 600) == 578

def test_rank_to_y_is_monotonic():
    ys = [rank_to_y(rank, 600) for rank in range(1, 1000)]
    assert ys == sorted(ys)
    assert rank_to_y(1, 600) < rank_to_y(500, 600) < rank_to_y(999, 600) <= rank_to_y(0, 600)

def test_rank_to_y_custom_band():
    assert rank_to_y(0, 300, space=10) == 290
    assert rank_to_y(100, 300, space=10) == 280 * 100 // 1000 - 1 + 10

def test_color_for_cycles_palette():
    assert [color_for(i) for i in range(4)] == list(PALETTE)
    assert color_for(4) == PALETTE[0]
    assert color_for(6, ["a", "b"]) == "a"

# --- Tests for the scene ---

def test_empty_scene_has_only_the_grid():
    scene = build_scene([], 600, 600)
    assert len(scene) == GRID_PRIMITIVES
    assert scene[0] == Line(0, SPACE, 600, SPACE, PALETTE[0])
    assert scene[1] == Line(0, 600 - SPACE, 600, 600 - SPACE, PALETTE[0])

def test_scene_decade_gridlines_and_labels():
    scene = build_scene([], 600, 600)
    labels = [item for item in scene if isinstance(item, Label)]
    assert [label.text for label in labels] == [str(1900 + 10 * i) for i in range(DECADES)]
    gap = 600 // DECADES
    assert [label.x for label in labels] == [gap * i for i in range(DECADES)]
    assert all(label.y == 600 for label in labels)

def test_scene_series_segments_and_labels():
    scene = build_scene([AVA], 600, 600)
    assert len(scene) == GRID_PRIMITIVES + SERIES_PRIMITIVES
    series_items = scene[GRID_PRIMITIVES:]
    assert series_items[0] == Label("Ava 5", 0, rank_to_y(5, 600), PALETTE[0])

    lines = [item for item in series_items if isinstance(item, Line)]
    labels = [item for item in series_items if isinstance(item, Label)]
    assert len(lines) == DECADES - 1
    assert [label.text for label in labels] == [f"Ava {rank}" for rank in AVA.ranks]

    gap = 600 // DECADES
    # decade 2 is unranked, so both segments touching it hit the bottom boundary
    assert lines[1] == Line(gap, rank_to_y(3, 600), 2 * gap, 600 - SPACE, PALETTE[0])
    assert lines[2].y1 == 600 - SPACE

def test_scene_colors_follow_insertion_order():
    scene = build_scene([AVA, BOB], 600, 600)
    bob_items = scene[GRID_PRIMITIVES + SERIES_PRIMITIVES:]
    assert {item.color for item in bob_items} == {PALETTE[1]}

# --- Tests for the plot state and view ---

def test_plot_state_is_immutable():
    state = PlotState()
    added = state.with_series(AVA)
    assert len(state) == 0
    assert added.active == (AVA,)
    assert added.with_series(AVA) is added
    assert added.with_series(BOB).without_earliest().active == (BOB,)
    assert PlotState().without_earliest() == PlotState()

def test_add_series_is_idempotent(view, redraws):
    view.add_series(AVA)
    view.add_series(AVA)
    assert view.active == (AVA,)
    assert len(redraws) == 1

def test_add_series_uses_value_equality(view, redraws):
    view.add_series(AVA)
    view.add_series(parse_line("Ava 5 3 0 1 2 4 6 7 8 9 10"))
    view.add_series(parse_line("Ava 5 3 0 1 2 4 6 7 8 9 11"))
    assert len(view.active) == 2
    assert len(redraws) == 2

def test_remove_earliest_until_empty(view, redraws):
    view.add_series(AVA)
    view.add_series(BOB)
    view.remove_earliest()
    assert view.active == (BOB,)
    view.remove_earliest()
    view.remove_earliest()
    view.remove_earliest()
    assert view.active == ()
    assert len(redraws) == 4

def test_remove_all_always_redraws(view, redraws):
    view.remove_all()
    view.add_series(AVA)
    view.remove_all()
    assert view.active == ()
    assert len(redraws) == 3

def test_view_without_callback():
    view = PlotView()
    view.add_series(AVA)
    view.remove_earliest()
    assert len(view.scene()) == GRID_PRIMITIVES

# --- Tests for the matplotlib renderer ---

def test_render_figure_draws_every_primitive():
    scene = build_scene([AVA, BOB], 600, 600)
    fig = render_figure(scene, 600, 600)
    ax = fig.axes[0]
    assert len(ax.lines) == sum(isinstance(item, Line) for item in scene)
    assert len(ax.texts) == sum(isinstance(item, Label) for item in scene)
    assert ax.get_ylim() == (600, 0)
    assert tuple(fig.get_size_inches() * fig.dpi) == (600, 600)
    plt.close(fig)

def test_fig_to_base64_returns_png():
    encoded = fig_to_base64(render_figure(build_scene([AVA], 300, 200), 300, 200))
    assert encoded.startswith("iVBORw0KGgo")

# --- Tests for the plotext renderer ---

class RecordingPlot:
    """Stands in for a plotext module and records what gets drawn."""
    def __init__(self):
        self.calls = []

    def __getattr__(self, name):
        return lambda *args, **kwargs: self.calls.append((name, args, kwargs))

    def named(self, name):
        return [call for call in self.calls if call[0] == name]


def test_draw_scene_flips_y_for_plotext():
    from name_trends.tui import draw_scene

    scene = build_scene([AVA], 600, 600)
    plot = RecordingPlot()
    draw_scene(plot, scene, 600, 600)

    assert plot.calls[0][0] == "clear_data"
    assert plot.named("ylim") == [("ylim", (0, 600), {})]

    lines = plot.named("plot")
    assert len(lines) == sum(isinstance(item, Line) for item in scene)
    # top boundary at y=20 lands 20 below the top of an upward y axis
    assert lines[0][1] == ([0, 600], [580, 580])
    assert lines[1][1] == ([0, 600], [SPACE, SPACE])

    texts = plot.named("text")
    labels = [item for item in scene if isinstance(item, Label)]
    assert [call[1] for call in texts] == [(label.text, label.x, 600 - label.y) for label in labels]
    assert texts[-1][2]["color"] == PALETTE[0]
