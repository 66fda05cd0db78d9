# test_presentation.py
from shape_calculator import Shape
import presentation

def test_display_shape_never_zero():
    assert presentation.display_shape(Shape(0, 0)) == (1, 1)
    assert presentation.display_shape(Shape(0, 7)) == (1, 7)
    assert presentation.display_shape(Shape(26, 26)) == (26, 26)

def test_conv_label():
    assert presentation.conv_label(Shape(26, 26)) == 'Conv 26×26'
    assert presentation.conv_label(Shape(0, 0)) == 'Conv n/a'
    assert presentation.conv_label(Shape(0, 3)) == 'Conv n/a'

def test_pool_window_larger_than_input_is_invalid():
    # even if the pooled shape looks fine, the window must fit into the convolution output
    assert not presentation.pool_is_valid(Shape(1, 1), Shape(1, 1), 2)
    assert not presentation.pool_is_valid(Shape(5, 1), Shape(2, 1), 2)
    assert presentation.pool_is_valid(Shape(2, 2), Shape(1, 1), 2)

def test_pool_label():
    assert presentation.pool_label(Shape(26, 26), Shape(13, 13), 2) == 'Pool 13×13'
    assert presentation.pool_label(Shape(26, 26), Shape(0, 0), 2) == 'Pool n/a'
    assert presentation.pool_label(Shape(1, 1), Shape(1, 1), 2) == 'Pool n/a'

def test_other_labels():
    assert presentation.input_label(28, 3) == 'Input 28×28×3'
    assert presentation.kernel_label(3, 3) == 'K 3×3×3'
    assert presentation.summary_label(Shape(13, 13), 4, True) == 'Output 13×13×4'
    assert presentation.summary_label(Shape(0, 0), 4, False) == 'Output n/a'
