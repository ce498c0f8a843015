"""Functions for generating static and interactive visualizations of 2D trees."""

from __future__ import annotations

import logging
from typing import Any

import matplotlib.pyplot as plt
import numpy as np
from ipywidgets import (
    Accordion,
    Button,
    Checkbox,
    ColorPicker,
    FloatSlider,
    HBox,
    IntSlider,
    Layout,
    VBox,
    interactive_output,
)

from forest2d.forest import Forest
from forest2d.models.params import TreeParams
from forest2d.utils.geometry import Vec
from forest2d.utils.render import MatplotlibSurface

_LOGGER = logging.getLogger(__name__)

CONTROL_GROUPS = {
    "Growth": ("prob_next", "prob_branch", "max_depth"),
    "Branches": (
        "max_branch_size",
        "min_branch_size",
        "max_branch_length",
        "min_branch_length",
    ),
    "Leaves": ("min_num_leafs", "max_num_leafs", "leaf_size", "leaf_length"),
    "Angles": ("var_branch_angle", "var_leaf_angle"),
    "Colors": ("color_branch", "color_leaf", "color_debug"),
    "Debug": ("debug",),
}

# sliders for these parameters may not leave the range accepted by TreeParams
_SLIDER_LIMITS = {
    "prob_next": (0.0, 1.0),
    "prob_branch": (0.0, 0.99),
}


def canvas_origin(width: float, height: float) -> Vec:
    """Trees grow from the bottom center of the canvas."""
    return Vec(width / 2, height)


def draw_forest(forest: Forest, ax, width: float = 800, height: float = 800) -> None:
    """Draws a forest onto a matplotlib axes set up as a y-down canvas."""
    ax.set_xlim(0, width)
    ax.set_ylim(height, 0)
    ax.set_aspect("equal")
    ax.set_axis_off()
    forest.draw(MatplotlibSurface(ax), canvas_origin(width, height))


def plot_tree(
    params: TreeParams | None = None,
    seed: int | None = None,
    ax=None,
    width: float = 800,
    height: float = 800,
):
    """Generates a single tree and plots it with matplotlib.

    Parameters
    -----------
    params (TreeParams, optional): generation parameters, defaults are used
        when omitted.
    seed (int, optional): seed of the random generator, for reproducible trees.
    ax (matplotlib Axes, optional): axes to draw on, a new figure is created
        when omitted.
    width, height (numeric): size of the canvas, in canvas units.

    Returns
    -------
    ax : matplotlib Axes
    """
    if ax is None:
        _, ax = plt.subplots(figsize=(width / 100, height / 100))

    forest = Forest(params, rng=np.random.default_rng(seed))
    draw_forest(forest, ax, width, height)
    return ax


def _number_control(name: str, value: float) -> FloatSlider | IntSlider:
    low, high = sorted((value / 2, value * 2))
    if low == high:
        high = low + 1.0
    if name in _SLIDER_LIMITS:
        min_limit, max_limit = _SLIDER_LIMITS[name]
        low, high = max(low, min_limit), min(high, max_limit)

    if isinstance(value, int):
        return IntSlider(
            value=value,
            min=int(low),
            max=max(int(high), value + 1),
            step=1,
            description=name,
        )

    step = abs(value) / 100 if value else 0.01
    return FloatSlider(
        value=value,
        min=low,
        max=high,
        step=step,
        description=name,
        readout_format=".3f",
    )


def build_tree_controls(
    params: TreeParams | None = None,
) -> tuple[Accordion, dict[str, Any]]:
    """Builds the User Interface (UI) and controls for the tree visualization.

    Numeric parameters get a slider ranging from half to twice their value,
    colors a color picker and flags a checkbox.
    """
    if params is None:
        params = TreeParams()

    controls = {}
    for name, value in params.model_dump().items():
        if isinstance(value, bool):
            controls[name] = Checkbox(value=value, description=name)
        elif isinstance(value, str):
            controls[name] = ColorPicker(value=value, description=name)
        else:
            controls[name] = _number_control(name, value)

    ui = Accordion(
        [
            VBox([controls[name] for name in group])
            for group in CONTROL_GROUPS.values()
        ]
    )
    for index, title in enumerate(CONTROL_GROUPS):
        ui.set_title(index, title)

    return ui, controls


def params_from_controls(controls: dict[str, Any]) -> TreeParams:
    """Builds validated parameters from the current values of the controls."""
    return TreeParams.model_validate({name: w.value for name, w in controls.items()})


def _build_interactive_tree(
    params: TreeParams | None, seed: int | None, width: float, height: float
) -> tuple[VBox, Forest, dict[str, Any], Button]:
    """Wires the controls, the reset button and the figure output to a forest.

    Returns the assembled widget along with the forest, the controls and the
    reset button it drives.
    """
    ui, controls = build_tree_controls(params)
    forest = Forest(params_from_controls(controls), rng=np.random.default_rng(seed))

    def show():
        fig, ax = plt.subplots(figsize=(width / 100, height / 100))
        draw_forest(forest, ax, width, height)
        plt.show()
        plt.close(fig)

    def update(**values):
        _LOGGER.debug("Regenerating tree from controls")
        forest.reset(TreeParams.model_validate(values))
        show()

    out = interactive_output(update, controls)

    reset_button = Button(
        description="↻", tooltip="regenerate", layout=Layout(width="40px", height="40px")
    )

    def on_reset(_button):
        with out:
            out.clear_output(wait=True)
            forest.reset()
            show()

    reset_button.on_click(on_reset)

    widget = VBox(
        [
            HBox(
                [VBox([reset_button, ui]), out],
                layout=Layout(
                    width="100%",
                    display="flex",
                    align_items="stretch",
                    justify_content="space-between",
                    gap="12px",
                ),
            ),
        ],
        layout=Layout(width="100%"),
    )
    return widget, forest, controls, reset_button


def plot_tree_interactive(
    params: TreeParams | None = None,
    seed: int | None = None,
    width: float = 800,
    height: float = 800,
) -> VBox:
    """Plots a tree that is regenerated whenever one of its parameters changes.

    A reset button regenerates the tree with the current parameters.
    """
    widget, _, _, _ = _build_interactive_tree(params, seed, width, height)
    return widget
