#presentation.py
"""
Turns computed shapes into what the page shows.
shape_calculator.py silently clamps bad geometry to 0. This is the one place that decides a result is 'n/a',
and the place that swaps a 0 sized shape for a 1x1 placeholder so the renderer always gets something drawable.
"""

from shape_calculator import Shape

NA = 'n/a'

def display_shape(shape: Shape) -> Shape:
    """at least 1x1"""
    return Shape(max(1, shape.height), max(1, shape.width))

def conv_is_valid(conv_shape: Shape) -> bool:
    return conv_shape.height > 0 and conv_shape.width > 0

def pool_is_valid(conv_shape: Shape, pool_shape: Shape, pool_size: int) -> bool:
    """
    A pooling window larger than its input is invalid, whatever the arithmetic says.
    This is checked against the real convolution output, not the 1x1 placeholder.
    """
    window_fits = conv_shape.height >= pool_size and conv_shape.width >= pool_size
    return window_fits and pool_shape.height > 0 and pool_shape.width > 0

def input_label(size: int, channels: int) -> str:
    return f'Input {size}×{size}×{channels}'

def kernel_label(kernel_size: int, channels: int) -> str:
    return f'K {kernel_size}×{kernel_size}×{channels}'

def conv_label(conv_shape: Shape) -> str:
    if conv_is_valid(conv_shape):
        return f'Conv {conv_shape.height}×{conv_shape.width}'
    return f'Conv {NA}'

def pool_label(conv_shape: Shape, pool_shape: Shape, pool_size: int) -> str:
    if pool_is_valid(conv_shape, pool_shape, pool_size):
        return f'Pool {pool_shape.height}×{pool_shape.width}'
    return f'Pool {NA}'

def summary_label(pool_shape: Shape, depth: int, valid: bool) -> str:
    if valid:
        return f'Output {pool_shape.height}×{pool_shape.width}×{depth}'
    return f'Output {NA}'
