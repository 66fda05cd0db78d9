#renderer.py
"""
Layered diagram renderer.
Draws an h x w grid of cells, optionally stacked c layers deep, onto a surface that is resized to fit a container.

Layout, for a grid of h x w cells stacked c deep:
    available = min(container_width, width_cap) - 2*padding - (c-1)*offset
    cell      = clamp(floor(available / w), min_cell, max_cell)
    width     = cell*w + 2*padding + (c-1)*offset
    height    = cell*h + 2*padding + (c-1)*offset

Every draw_* call resizes (and thereby clears) the surface and redraws from scratch.
The same inputs always give the same pixels.
"""

from dataclasses import dataclass
from typing import NamedTuple
from grid import Grid
from surfaces import Surface

DEFAULT_CONTAINER_WIDTH = 320   # used when the container width is unknown
WIDTH_CAP = 640                 # wider containers don't make the grids any bigger
MIN_CELL = 4

BACKGROUND = '#ffffff'
GRID_LINE = '#cbd5e1'
FRONT_LINE = '#64748b'
FRONT_LINE_WIDTH = 2
VALUE_LINE = '#e5e7eb'
LABEL_COLOR = '#334155'
NUMBER_COLOR = '#111827'

# numbers are only printed into cells at least this large
MIN_NUMBER_CELL = 16

@dataclass(frozen=True)
class GridStyle:
    padding: int
    max_cell: int
    offset: int = 0
    min_cell: int = MIN_CELL
    width_cap: int = WIDTH_CAP

FLAT = GridStyle(padding=8, max_cell=28)
STACKED = GridStyle(padding=12, max_cell=24, offset=8)

class Layout(NamedTuple):
    cell: int
    width: int
    height: int
    padding: int
    offset: int

def compute_layout(h: int, w: int, depth: int = 1, container_width: int = None, style: GridStyle = FLAT) -> Layout:
    """Cell size and canvas size of an h x w grid, `depth` layers deep."""
    if h < 1 or w < 1 or depth < 1:
        raise ValueError(f"Expected a grid of at least 1x1x1, got {h}x{w}x{depth}")
    if container_width is None:
        container_width = DEFAULT_CONTAINER_WIDTH

    stack = (depth - 1) * style.offset
    available = min(container_width, style.width_cap) - 2*style.padding - stack
    cell = min(style.max_cell, max(style.min_cell, available // w))

    return Layout(
        cell=cell,
        width=cell*w + 2*style.padding + stack,
        height=cell*h + 2*style.padding + stack,
        padding=style.padding,
        offset=style.offset,
    )

def font_size(cell: int) -> int:
    return max(10, int(cell * 0.38))

def _hsl(hue: int, saturation: int, lightness: float) -> str:
    lightness = min(100., max(0., lightness))
    return f'hsl({hue}, {saturation}%, {lightness:.2f}%)'

def color_for(value: float, vmin: float, vmax: float) -> str:
    """
    Non negative ranges (e.g. inputs in [0, 1]) go from white to orange.
    Signed ranges (e.g. convolution outputs) go from blue through white to red, symmetric around 0.
    """
    if vmin >= 0:
        t = (value - vmin) / (vmax - vmin + 1e-8)
        return _hsl(35, 90, 100 - 60*t)

    a = max(abs(vmin), abs(vmax)) + 1e-8
    t = value / a
    if t >= 0:
        return _hsl(0, 80, 100 - 60*t)
    return _hsl(220, 80, 100 - 60*(-t))

def format_value(value: float) -> str:
    return f'{0. if abs(value) < 1e-4 else value:.2f}'

def _draw_label(surface: Surface, text: str, cell: int) -> None:
    surface.fill_text(text, surface.width - 6, surface.height - 4, LABEL_COLOR, font_size(cell),
                      align='right', baseline='bottom')

def _fill_cells(surface: Surface, grid: Grid, x0: int, y0: int, cell: int, show_numbers: bool) -> None:
    vmin, vmax = grid.min(), grid.max()
    if vmin == vmax:
        vmin, vmax = vmin - 1, vmax + 1

    size = font_size(cell)
    for i in range(grid.height):
        for j in range(grid.width):
            x = x0 + j*cell
            y = y0 + i*cell
            value = grid[i, j]
            surface.fill_rect(x, y, cell, cell, color_for(value, vmin, vmax))
            surface.stroke_rect(x, y, cell, cell, VALUE_LINE)
            if show_numbers and cell >= MIN_NUMBER_CELL:
                surface.fill_text(format_value(value), x + cell // 2, y + cell // 2, NUMBER_COLOR, size,
                                  align='center', baseline='middle')

def draw_outline_grid(surface: Surface, h: int, w: int, label: str = None, container_width: int = None) -> Layout:
    """A flat grid, one outlined square per cell, with a label in the bottom right corner."""
    layout = compute_layout(h, w, 1, container_width, FLAT)
    surface.resize(layout.width, layout.height)
    surface.fill_rect(0, 0, layout.width, layout.height, BACKGROUND)

    for i in range(h):
        for j in range(w):
            x = layout.padding + j*layout.cell
            y = layout.padding + i*layout.cell
            surface.stroke_rect(x, y, layout.cell, layout.cell, GRID_LINE)

    _draw_label(surface, label or f'{h}×{w}', layout.cell)
    return layout

def draw_stacked_grid(surface: Surface, h: int, w: int, c: int, label: str = None,
                      container_width: int = None, front: Grid = None) -> Layout:
    """
    c layers drawn back to front, each shifted diagonally by `offset`.
    Only the border of each layer is drawn, no per cell gridlines. The front layer gets the darker and thicker border.
    If `front` is given, the cells of the front layer are filled with its values.
    """
    if front is not None and front.shape != (h, w):
        raise ValueError(f"Expected front layer of shape {(h, w)}, got {front.shape}")

    layout = compute_layout(h, w, c, container_width, STACKED)
    surface.resize(layout.width, layout.height)
    surface.fill_rect(0, 0, layout.width, layout.height, BACKGROUND)

    for layer in range(c):
        ox = layout.padding + (c - 1 - layer) * layout.offset
        oy = layout.padding + (c - 1 - layer) * layout.offset
        is_front = layer == c - 1
        if is_front and front is not None:
            _fill_cells(surface, front, ox, oy, layout.cell, show_numbers=False)
        if is_front:
            surface.stroke_rect(ox, oy, layout.cell * w, layout.cell * h, FRONT_LINE, FRONT_LINE_WIDTH)
        else:
            surface.stroke_rect(ox, oy, layout.cell * w, layout.cell * h, GRID_LINE)

    _draw_label(surface, label or f'{h}×{w}×{c}', layout.cell)
    return layout

def draw_value_grid(surface: Surface, grid: Grid, container_width: int = None, show_numbers: bool = True,
                    label: str = None) -> Layout:
    """
    A flat grid with every cell colored by its value, and the value printed if the cell is large enough.
    The shape label goes in the bottom right corner, like on the outline grids.
    """
    layout = compute_layout(grid.height, grid.width, 1, container_width, FLAT)
    surface.resize(layout.width, layout.height)
    surface.fill_rect(0, 0, layout.width, layout.height, BACKGROUND)
    _fill_cells(surface, grid, layout.padding, layout.padding, layout.cell, show_numbers)
    _draw_label(surface, label or f'{grid.height}×{grid.width}', layout.cell)
    return layout
