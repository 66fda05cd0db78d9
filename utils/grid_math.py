import numpy as np
from grid import Grid
from shape_calculator import VALID, padding_for

"""
Numeric content for the 'values' mode: random inputs and kernels, and the actual convolution and pooling.
Loops are written out on purpose, every output cell is one visible sliding window sum.
Degenerate geometry gives an empty grid instead of an error, same as shape_calculator.py.
"""

def seeded_random(seed):
    """fractional part of sin(seed) * 10000. Deterministic, in [0, 1), works on scalars and arrays."""
    x = np.sin(seed) * 10000
    return x - np.floor(x)

def random_grid(height: int, width: int, seed: int = 0) -> Grid:
    """
    Input values in [0, 1].
    Cell (i, j) uses seeded_random(seed*height*width + i*width + j + 1), so grids with different seeds never share a sequence.
    """
    idx = np.arange(height * width, dtype=np.float64).reshape(height, width)
    return Grid(seeded_random(seed * height * width + idx + 1))

def random_kernel(kernel_size: int, seed: int = 0) -> Grid:
    """normal random kernel weights, normalized to zero mean and unit variance"""
    rng = np.random.default_rng(seed)
    weights = rng.standard_normal((kernel_size, kernel_size))
    centered = weights - weights.mean()
    # a 1x1 kernel centers to 0, don't divide by 0
    std = np.sqrt(np.mean(centered**2)) or 1.
    return Grid(centered / std)

def pad2d(grid: Grid, pad: int) -> Grid:
    """zero padding of `pad` cells on every border"""
    return Grid(np.pad(grid.data, pad, mode='constant', constant_values=0.))

def convolve2d(input: Grid, kernel: Grid, stride: int = 1, padding: str = VALID) -> Grid:
    """
    Direct sliding window sum of input * kernel (cross-correlation, as in every deep learning framework).
    'same' uses the kernel height for the padding on both axes, a square kernel is assumed.
    """
    x = pad2d(input, padding_for(kernel.height, padding))
    kh, kw = kernel.shape

    out = Grid.zeros((x.height - kh) // stride + 1, (x.width - kw) // stride + 1)
    for i in range(out.height):
        for j in range(out.width):
            total = 0.
            for ki in range(kh):
                for kj in range(kw):
                    total += x[i*stride + ki, j*stride + kj] * kernel[ki, kj]
            out[i, j] = total
    return out

def pool2d(input: Grid, size: int = 2, stride: int = 2, pool_type: str = 'max') -> Grid:
    """windowed max or average"""
    if pool_type not in ('max', 'avg'):
        raise ValueError(f"Unknown pool type: {pool_type}")

    out = Grid.zeros((input.height - size) // stride + 1, (input.width - size) // stride + 1)
    for i in range(out.height):
        for j in range(out.width):
            window = input[i*stride:i*stride + size, j*stride:j*stride + size]
            out[i, j] = window.max() if pool_type == 'max' else window.sum() / (size * size)
    return out

def convolve_channels(inputs: [Grid], kernels: [Grid], stride: int = 1, padding: str = VALID) -> Grid:
    """Multi channel convolution: one kernel slice per input channel, the results are summed."""
    if len(inputs) != len(kernels):
        raise ValueError(f"Expected one kernel slice per input channel, got {len(kernels)} slices for {len(inputs)} channels")
    out = convolve2d(inputs[0], kernels[0], stride, padding)
    for channel, kernel in zip(inputs[1:], kernels[1:]):
        out += convolve2d(channel, kernel, stride, padding)
    return out
