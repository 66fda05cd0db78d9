# test_configuration.py
import pytest
from dataclasses import FrozenInstanceError
from configuration import Configuration, DEFAULTS

def test_defaults():
    c = Configuration()
    assert c.channels == 3
    assert c.input_size == 28
    assert (c.kernel_size, c.conv_stride, c.conv_padding) == (3, 1, 'valid')
    assert (c.pool_type, c.pool_size, c.pool_stride) == ('max', 2, 2)
    assert c.to_dict() == DEFAULTS

def test_from_dict():
    c = Configuration.from_dict({'input_size': 12, 'kernel_count': 5})
    assert c.input_size == 12
    assert c.kernel_count == 5
    # everything else falls back to the defaults
    assert c.channels == DEFAULTS['channels']

    with pytest.raises(ValueError, match="Unknown configuration keys"):
        Configuration.from_dict({'kernel_sizes': 3})

def test_validate_types():
    with pytest.raises(TypeError):
        Configuration(input_size='28')
    with pytest.raises(TypeError):
        Configuration(input_size=28.0)
    with pytest.raises(TypeError):
        Configuration(kernel_count=True)
    with pytest.raises(TypeError):
        Configuration(conv_padding=None)
    with pytest.raises(TypeError):
        Configuration(show_numbers=1)

def test_validate_ranges():
    with pytest.raises(ValueError):
        Configuration(channels=0)
    with pytest.raises(ValueError):
        Configuration(kernel_count=-1)
    with pytest.raises(ValueError):
        Configuration(input_size=0)
    with pytest.raises(ValueError):
        Configuration(kernel_size=0)
    with pytest.raises(ValueError):
        Configuration(conv_stride=0)
    with pytest.raises(ValueError):
        Configuration(pool_size=-2)
    with pytest.raises(ValueError):
        Configuration(pool_stride=0)
    with pytest.raises(ValueError):
        Configuration(seed=-1)

def test_validate_choices():
    with pytest.raises(ValueError):
        Configuration(conv_padding='full')
    with pytest.raises(ValueError):
        Configuration(pool_type='min')
    with pytest.raises(ValueError):
        Configuration(mode='animation')

def test_zero_kernels_and_oversized_kernels_are_allowed():
    # degenerate geometry is not a configuration error, it shows up as 'n/a' in the diagram
    Configuration(kernel_count=0)
    Configuration(input_size=2, kernel_size=5)

def test_even_kernel_same_padding_warns():
    with pytest.warns(UserWarning, match="only exact for odd kernel sizes"):
        Configuration(kernel_size=4, conv_padding='same')

def test_replace_makes_a_new_snapshot():
    old = Configuration()
    new = old.replace(input_size=10)
    assert new.input_size == 10
    assert old.input_size == 28
    assert new is not old

    with pytest.raises(ValueError):
        old.replace(input_size=0)

def test_frozen():
    c = Configuration()
    with pytest.raises(FrozenInstanceError):
        c.input_size = 5
