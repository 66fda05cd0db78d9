#visualizer.py
"""
Visualizer
Takes   - a Configuration snapshot
        - a source for the current container width

Returns a Diagram: one drawn surface per visual element of a convolution + pooling layer.
    - the input block, stacked `channels` deep
    - per kernel: the kernel (stacked `channels` deep), its convolution output and its pooled output
    - one stacked summary of all pooled outputs, `kernel_count` deep

There is no incremental update. Both entry points, on_configuration_changed() and on_viewport_resized(),
recompute every shape and redraw every element from scratch.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List
from configuration import Configuration
from grid import Grid
from shape_calculator import Shape, conv_output_shape, pool_output_shape
from surfaces import Surface, RasterSurface
from renderer import DEFAULT_CONTAINER_WIDTH, Layout, draw_outline_grid, draw_stacked_grid, draw_value_grid
from utils.grid_math import random_grid, random_kernel, convolve_channels, pool2d
from utils.profiler import profiler
import presentation

class ElementKind(str, Enum):
    INPUT = 'input'
    KERNEL = 'kernel'
    CONV_OUTPUT = 'conv_output'
    POOL_OUTPUT = 'pool_output'
    STACKED_SUMMARY = 'stacked_summary'

@dataclass(frozen=True)
class VisualElement:
    """
    One drawable unit of a render pass.
    `shape` is the computed shape and may contain zeros, `valid` is False when the label reads 'n/a'.
    `index` is the kernel the element belongs to, None for the input and the summary.
    """
    kind: ElementKind
    shape: Shape
    depth: int
    label: str
    valid: bool = True
    index: int = None

    @property
    def display_shape(self) -> Shape:
        return presentation.display_shape(self.shape)

@dataclass
class RenderedElement:
    element: VisualElement
    surface: Surface
    layout: Layout

    @property
    def label(self) -> str:
        return self.element.label

@dataclass
class Diagram:
    """The result of one render pass."""
    config: Configuration
    container_width: int
    elements: List[RenderedElement] = field(default_factory=list)

    def __iter__(self):
        return iter(self.elements)

    def __len__(self) -> int:
        return len(self.elements)

    def by_kind(self, kind: ElementKind) -> List[RenderedElement]:
        return [rendered for rendered in self.elements if rendered.element.kind == kind]

    @property
    def labels(self) -> List[str]:
        return [rendered.label for rendered in self.elements]

def plan_elements(c: Configuration) -> List[VisualElement]:
    """
    Every visual element of a render pass, in drawing order, with shapes and labels but nothing drawn yet.
    With kernel_count = 0 there are no kernels and no summary, only the input.
    """
    conv_shape = conv_output_shape(c.input_size, c.input_size, c.kernel_size, c.conv_stride, c.conv_padding)
    conv_valid = presentation.conv_is_valid(conv_shape)
    # pool the placeholder if the convolution has no output, the label still says 'n/a'
    shown = presentation.display_shape(conv_shape)
    pool_shape = pool_output_shape(shown.height, shown.width, c.pool_size, c.pool_stride)
    pool_valid = presentation.pool_is_valid(conv_shape, pool_shape, c.pool_size)

    elements = [VisualElement(ElementKind.INPUT, Shape(c.input_size, c.input_size), c.channels,
                              presentation.input_label(c.input_size, c.channels))]

    for idx in range(c.kernel_count):
        elements += [
            VisualElement(ElementKind.KERNEL, Shape(c.kernel_size, c.kernel_size), c.channels,
                          presentation.kernel_label(c.kernel_size, c.channels), index=idx),
            VisualElement(ElementKind.CONV_OUTPUT, conv_shape, 1,
                          presentation.conv_label(conv_shape), valid=conv_valid, index=idx),
            VisualElement(ElementKind.POOL_OUTPUT, pool_shape, 1,
                          presentation.pool_label(conv_shape, pool_shape, c.pool_size), valid=pool_valid, index=idx),
        ]

    if c.kernel_count > 0:
        elements.append(VisualElement(ElementKind.STACKED_SUMMARY, pool_shape, c.kernel_count,
                                      presentation.summary_label(pool_shape, c.kernel_count, pool_valid),
                                      valid=pool_valid))
    return elements

@dataclass
class LayerValues:
    """Actual numbers for the 'values' mode. kernels[i][ch] is the slice of kernel i for input channel ch."""
    inputs: List[Grid]
    kernels: List[List[Grid]]
    conv_outputs: List[Grid]
    pool_outputs: List[Grid]

def compute_values(c: Configuration) -> LayerValues:
    """Random inputs and kernels (deterministic for a given seed), convolved and pooled for real."""
    inputs = [random_grid(c.input_size, c.input_size, seed=c.seed * c.channels + ch) for ch in range(c.channels)]
    kernels = [[random_kernel(c.kernel_size, seed=[c.seed, idx, ch]) for ch in range(c.channels)]
               for idx in range(c.kernel_count)]
    conv_outputs = [convolve_channels(inputs, kernel, c.conv_stride, c.conv_padding) for kernel in kernels]
    pool_outputs = [pool2d(conv, c.pool_size, c.pool_stride, c.pool_type) for conv in conv_outputs]
    return LayerValues(inputs, kernels, conv_outputs, pool_outputs)

class Visualizer:
    """
    Owns the current Configuration snapshot and redraws everything when it changes or the viewport is resized.

    Attributes:
        config (Configuration): The snapshot the next render pass reads. Replaced, never mutated.
        container_width (Callable[[], int]): Asked for the current container width (px) at the start of every pass.
        surface_factory (Callable[[], Surface]): Creates a fresh surface per element, RasterSurface by default.
        diagram (Diagram): The result of the last render pass, None before the first one.
    """
    def __init__(
        self,
        config: Configuration = None,
        container_width: Callable[[], int] = None,
        surface_factory: Callable[[], Surface] = RasterSurface,
    ) -> None:
        self.config = self._validate_config(config if config is not None else Configuration())
        self.container_width = container_width if container_width is not None else (lambda: DEFAULT_CONTAINER_WIDTH)
        if not callable(self.container_width):
            raise TypeError(f"Expected 'container_width' to be callable, got {type(self.container_width)}")
        self.surface_factory = surface_factory
        self.diagram = None

    @staticmethod
    def _validate_config(config: Configuration) -> Configuration:
        if not isinstance(config, Configuration):
            raise TypeError(f"Expected 'config' type Configuration, got {type(config)}")
        return config

    def on_configuration_changed(self, new_config: Configuration) -> Diagram:
        """Replace the snapshot wholesale and redraw."""
        self.config = self._validate_config(new_config)
        return self.render()

    def on_viewport_resized(self) -> Diagram:
        """The container width may have changed, redraw."""
        return self.render()

    def render(self) -> Diagram:
        """The full render pass: compute all shapes, then draw every element onto a fresh surface."""
        # one snapshot and one width for the whole pass
        c = self.config
        width = int(self.container_width())

        elements = plan_elements(c)
        with profiler(f'Render pass: {len(elements)} elements, {c.mode} mode, {width}px', pad_char='-'):
            values = compute_values(c) if c.mode == 'values' else None
            diagram = Diagram(c, width)
            for element in elements:
                surface = self.surface_factory()
                layout = self._draw(surface, element, c, width, values)
                diagram.elements.append(RenderedElement(element, surface, layout))

        self.diagram = diagram
        return diagram

    @staticmethod
    def _draw(surface: Surface, element: VisualElement, c: Configuration, width: int, values: LayerValues) -> Layout:
        h, w = element.display_shape
        show_values = values is not None and element.valid

        if element.kind == ElementKind.INPUT:
            front = values.inputs[0] if show_values else None
            return draw_stacked_grid(surface, h, w, element.depth, element.label, width, front=front)

        if element.kind == ElementKind.KERNEL:
            front = values.kernels[element.index][0] if show_values else None
            return draw_stacked_grid(surface, h, w, element.depth, element.label, width, front=front)

        if element.kind == ElementKind.CONV_OUTPUT:
            if show_values:
                return draw_value_grid(surface, values.conv_outputs[element.index], width, c.show_numbers,
                                       element.label)
            return draw_outline_grid(surface, h, w, element.label, width)

        if element.kind == ElementKind.POOL_OUTPUT:
            if show_values:
                return draw_value_grid(surface, values.pool_outputs[element.index], width, c.show_numbers,
                                       element.label)
            return draw_outline_grid(surface, h, w, element.label, width)

        if element.kind == ElementKind.STACKED_SUMMARY:
            front = values.pool_outputs[0] if show_values else None
            return draw_stacked_grid(surface, h, w, element.depth, element.label, width, front=front)

        raise ValueError(f"Unknown element kind: {element.kind}")
