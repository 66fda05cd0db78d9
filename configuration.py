#configuration.py
from dataclasses import dataclass, asdict, fields, replace
from warnings import warn
from shape_calculator import VALID, SAME

PADDINGS = (VALID, SAME)
POOL_TYPES = ('max', 'avg')
MODES = ('diagram', 'values')

# default config, mirrors the controls of the page
DEFAULTS = {
    'channels': 3,          # RGB input
    'input_size': 28,       # input is input_size x input_size
    'kernel_count': 2,      # number of kernels (= output channels)
    'kernel_size': 3,       # square kernels
    'conv_stride': 1,
    'conv_padding': VALID,  # 'valid' (no padding) or 'same'
    'pool_type': 'max',     # 'max' or 'avg', only used in 'values' mode
    'pool_size': 2,         # square pooling window
    'pool_stride': 2,
    'mode': 'diagram',      # 'diagram' draws outlines only, 'values' computes and colors actual numbers
    'show_numbers': True,   # print the values inside cells that are large enough, 'values' mode only
    'seed': 0,              # seed for the input and kernel values in 'values' mode
}

@dataclass(frozen=True)
class Configuration:
    """
    Immutable snapshot of everything a render pass reads.
    A new snapshot replaces the old one on every input event, use replace() to derive one.
    """
    channels: int = DEFAULTS['channels']
    input_size: int = DEFAULTS['input_size']
    kernel_count: int = DEFAULTS['kernel_count']
    kernel_size: int = DEFAULTS['kernel_size']
    conv_stride: int = DEFAULTS['conv_stride']
    conv_padding: str = DEFAULTS['conv_padding']
    pool_type: str = DEFAULTS['pool_type']
    pool_size: int = DEFAULTS['pool_size']
    pool_stride: int = DEFAULTS['pool_stride']
    mode: str = DEFAULTS['mode']
    show_numbers: bool = DEFAULTS['show_numbers']
    seed: int = DEFAULTS['seed']

    def __post_init__(self) -> None:
        self._validate_inputs()

    def _validate_inputs(self) -> None:
        for field in fields(self):
            value = getattr(self, field.name)
            expected = field.type
            # bool is a subclass of int, don't let True pass as a size
            if expected is int and isinstance(value, bool):
                raise TypeError(f"Expected '{field.name}' to be type int, got {type(value)}")
            if not isinstance(value, expected):
                raise TypeError(f"Expected '{field.name}' to be type {expected.__name__}, got {type(value)}")

        if self.channels < 1:
            raise ValueError(f"Expected channels >= 1, got {self.channels}")
        if self.kernel_count < 0:
            raise ValueError(f"Expected kernel_count >= 0, got {self.kernel_count}")
        if self.seed < 0:
            raise ValueError(f"Expected seed >= 0, got {self.seed}")
        for name in ('input_size', 'kernel_size', 'conv_stride', 'pool_size', 'pool_stride'):
            if getattr(self, name) <= 0:
                raise ValueError(f"Expected {name} > 0, got {getattr(self, name)}")

        if self.conv_padding not in PADDINGS:
            raise ValueError(f"Expected conv_padding in {PADDINGS}, got '{self.conv_padding}'")
        if self.pool_type not in POOL_TYPES:
            raise ValueError(f"Expected pool_type in {POOL_TYPES}, got '{self.pool_type}'")
        if self.mode not in MODES:
            raise ValueError(f"Expected mode in {MODES}, got '{self.mode}'")

        if self.conv_padding == SAME and self.kernel_size % 2 == 0:
            warn(f"'same' padding is only exact for odd kernel sizes, got kernel_size={self.kernel_size}. "
                 "The output will be smaller than the input.")

    @classmethod
    def from_dict(cls, c: dict) -> 'Configuration':
        """Build a snapshot from a (partial) config dict, missing keys fall back to DEFAULTS."""
        unknown = set(c) - set(DEFAULTS)
        if unknown:
            raise ValueError(f"Unknown configuration keys: {sorted(unknown)}")
        return cls(**{**DEFAULTS, **c})

    def replace(self, **changes) -> 'Configuration':
        """A new snapshot with some values changed. The original is left untouched."""
        return replace(self, **changes)

    def to_dict(self) -> dict:
        return asdict(self)
