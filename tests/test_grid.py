# test_grid.py
import pytest
import numpy as np
import torch
import torch.nn.functional as F
from grid import Grid
from shape_calculator import VALID, SAME, conv_output_shape, pool_output_shape, padding_for
from utils.grid_math import seeded_random, random_grid, random_kernel, pad2d, convolve2d, pool2d, convolve_channels

@pytest.fixture
def image():
    return random_grid(9, 11, seed=3)

@pytest.fixture
def kernel():
    return random_kernel(3, seed=1)

def to_torch(grid: Grid) -> torch.Tensor:
    """(1, 1, H, W) double tensor"""
    return torch.tensor(grid.data, dtype=torch.float64)[None, None]

def test_initialization():
    A = Grid([[1, 2, 3], [4, 5, 6]])
    assert A.shape == (2, 3)
    assert A.height == 2 and A.width == 3
    assert A.data.dtype == np.float64

    with pytest.raises(ValueError):
        Grid([1, 2, 3])
    with pytest.raises(ValueError):
        Grid(np.zeros((2, 2, 2)))

def test_zeros_clamps_negative_sizes():
    assert Grid.zeros(-1, 3).shape == (0, 3)
    assert Grid.zeros(0, 0).size == 0

def test_addition():
    A = Grid([[1, 2], [3, 4]])
    B = Grid([[10, 20], [30, 40]])
    C = A + B
    assert C.equal(Grid([[11, 22], [33, 44]]))
    # not in-place
    assert A.equal(Grid([[1, 2], [3, 4]]))
    A += B
    assert A.equal(C)

    with pytest.raises(ValueError):
        A + Grid.zeros(3, 3)
    with pytest.raises(TypeError):
        A + np.ones((2, 2))

def test_equality():
    A = Grid([[1., 2.]])
    assert A.equal(A._clone())
    assert not A.equal(Grid([[1., 2.1]]))
    assert not A.equal(Grid([[1.], [2.]]))

def test_seeded_random():
    values = seeded_random(np.arange(1, 1000))
    assert np.all(values >= 0) and np.all(values < 1)
    assert seeded_random(42) == seeded_random(42)

def test_random_grid(image):
    assert image.shape == (9, 11)
    assert 0 <= image.min() and image.max() < 1
    assert image.equal(random_grid(9, 11, seed=3)), "same seed, same grid"
    assert not image.equal(random_grid(9, 11, seed=4))

def test_random_kernel(kernel):
    assert kernel.shape == (3, 3)
    assert np.isclose(kernel.data.mean(), 0.)
    assert np.isclose(kernel.data.std(), 1.)
    assert kernel.equal(random_kernel(3, seed=1))
    # a single weight can't have unit variance, it is 0 instead of nan
    assert random_kernel(1, seed=0).equal(Grid([[0.]]))

def test_pad2d():
    padded = pad2d(Grid([[1., 2.], [3., 4.]]), 1)
    assert padded.shape == (4, 4)
    assert padded[1, 1] == 1. and padded[2, 2] == 4.
    assert padded.data.sum() == 10.

def test_convolve2d_by_hand():
    input = Grid(np.arange(16).reshape(4, 4))
    kernel = Grid([[1, 0], [0, -1]])
    out = convolve2d(input, kernel)
    # every window is x[i, j] - x[i+1, j+1] = -5
    assert out.equal(Grid(np.full((3, 3), -5.)))

@pytest.mark.parametrize('stride', [1, 2, 3])
@pytest.mark.parametrize('padding', [VALID, SAME])
def test_convolve2d_matches_torch(image, kernel, stride, padding):
    out = convolve2d(image, kernel, stride, padding)
    expected = F.conv2d(to_torch(image), to_torch(kernel), stride=stride, padding=padding_for(3, padding))[0, 0].numpy()

    assert out.shape == expected.shape, f"Unexpected shape: {out.shape}, expected {expected.shape}"
    assert np.allclose(out.data, expected)
    # and the shape calculator agrees with the actual convolution
    assert out.shape == conv_output_shape(image.height, image.width, 3, stride, padding)

def test_convolve_channels_matches_torch():
    inputs = [random_grid(8, 8, seed=ch) for ch in range(3)]
    kernels = [random_kernel(3, seed=[7, ch]) for ch in range(3)]
    out = convolve_channels(inputs, kernels)

    x = torch.tensor(np.stack([g.data for g in inputs]), dtype=torch.float64)[None]
    w = torch.tensor(np.stack([k.data for k in kernels]), dtype=torch.float64)[None]
    expected = F.conv2d(x, w)[0, 0].numpy()
    assert np.allclose(out.data, expected)

    with pytest.raises(ValueError):
        convolve_channels(inputs, kernels[:2])

@pytest.mark.parametrize('size, stride', [(2, 2), (3, 1), (3, 2)])
def test_pool2d_matches_torch(image, size, stride):
    max_out = pool2d(image, size, stride, 'max')
    avg_out = pool2d(image, size, stride, 'avg')
    assert np.allclose(max_out.data, F.max_pool2d(to_torch(image), size, stride)[0, 0].numpy())
    assert np.allclose(avg_out.data, F.avg_pool2d(to_torch(image), size, stride)[0, 0].numpy())
    assert max_out.shape == pool_output_shape(image.height, image.width, size, stride)

def test_degenerate_geometry_gives_empty_grids():
    # kernel larger than input
    out = convolve2d(Grid.zeros(2, 2), random_kernel(3))
    assert out.shape == (0, 0)
    # window larger than input
    assert pool2d(Grid([[1.]]), 2, 2).shape == (0, 0)

def test_unknown_pool_type(image):
    with pytest.raises(ValueError):
        pool2d(image, 2, 2, 'median')
