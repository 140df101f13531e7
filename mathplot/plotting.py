import matplotlib.pyplot as plt
import numpy as np

from mathplot.curves import CurveSequence
from mathplot.engine import Engine, PlotType


AXIS_COLOR = 'lightgray'
AXIS_WIDTH = 0.5
FUNCTION_COLOR = 'blue'
DERIVATIVE_COLOR = 'red'
CURVE_WIDTH = 1.5


def curve_segments(sequence: CurveSequence) -> 'list[np.ndarray]':
    """
    Draws the whole sequence from the start and returns its connected
    segments as (n, 2) arrays. A point flagged as a break begins a new
    segment.
    """
    sequence.reset()
    segments = []
    current = []

    while sequence.has_next():
        point = sequence.next_point()
        if sequence.has_break() and current:
            segments.append(np.array(current, dtype=float))
            current = []
        current.append(point)

    if current:
        segments.append(np.array(current, dtype=float))
    return segments


def add_curve(ax, sequence: CurveSequence, color: str, line_width: float = CURVE_WIDTH):
    for segment in curve_segments(sequence):
        ax.plot(segment[:, 0], segment[:, 1], color=color, linewidth=line_width)


def plot(engine: Engine, plot_type: PlotType, ax=None):
    """
    Plots the current function (blue) and its derivative (red) over the
    engine's plot window. Pan and zoom come from the matplotlib toolbar.
    Returns the axes drawn on.
    """
    if ax is None:
        _, ax = plt.subplots()

    lo, hi = engine.settings.plot_min, engine.settings.plot_max
    ax.plot([lo, hi], [0, 0], color=AXIS_COLOR, linewidth=AXIS_WIDTH)
    ax.plot([0, 0], [lo, hi], color=AXIS_COLOR, linewidth=AXIS_WIDTH)

    if engine.has_function():
        add_curve(ax, engine.curve(plot_type), FUNCTION_COLOR)
        if engine.has_derivative():
            add_curve(ax, engine.curve(plot_type, derivative=True), DERIVATIVE_COLOR)

    ax.set_xlim(lo, hi)
    ax.set_ylim(lo, hi)
    ax.set_title(f'{plot_type.value} plot')
    ax.grid(True)
    return ax
