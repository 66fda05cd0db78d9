#shape_calculator.py
from typing import NamedTuple

"""
Output extents of a convolution and a pooling layer.
None of these functions raise. Geometry that does not fit collapses to 0, and it is up to the caller
to turn that into something a human can read. See presentation.py.
"""

VALID = 'valid'
SAME = 'same'

class Shape(NamedTuple):
    height: int
    width: int

def padding_for(kernel_size: int, padding: str) -> int:
    """
    Symmetric padding on each border.
    'same' is only exact for odd kernel sizes. For even kernels the output is one row and column short.
    """
    if padding == SAME:
        return (kernel_size - 1) // 2
    return 0

def conv_output_shape(in_h: int, in_w: int, kernel_size: int, stride: int, padding: str = VALID) -> Shape:
    """out = floor((in + 2*pad - k) / stride) + 1, clamped at 0"""
    pad = padding_for(kernel_size, padding)
    out_h = (in_h + 2*pad - kernel_size) // stride + 1
    out_w = (in_w + 2*pad - kernel_size) // stride + 1
    return Shape(max(0, out_h), max(0, out_w))

def pool_output_shape(in_h: int, in_w: int, pool_size: int, stride: int) -> Shape:
    """
    out = floor((in - size) / stride) + 1, clamped at 0.
    A window larger than the input is not flagged here. Callers check in < size themselves.
    """
    out_h = (in_h - pool_size) // stride + 1
    out_w = (in_w - pool_size) // stride + 1
    return Shape(max(0, out_h), max(0, out_w))
