# %%
import os
from configuration import Configuration
from visualizer import Visualizer
from surfaces import RasterSurface
from utils.plots import shape_table, diagram_figure, save_diagram, save_fig_with_cfg

# config dict for the diagram, keys not given here fall back to configuration.DEFAULTS
c = {
    'channels': 3,          # RGB input
    'input_size': 28,       # MNIST sized input
    'kernel_count': 3,
    'kernel_size': 3,
    'conv_stride': 1,
    'conv_padding': 'valid',
    'pool_size': 2,
    'pool_stride': 2,
    'mode': 'values',       # 'diagram' for outlines only
}

CONTAINER_WIDTH = 480       # px available to each grid
OUT_DIR = './diagrams'

config = Configuration.from_dict(c)
print(f'Drawing a {config.input_size}x{config.input_size}x{config.channels} input through {config.kernel_count} kernels')

# %%
print(shape_table(config).to_string(index=False))

# %%
visualizer = Visualizer(config, container_width=lambda: CONTAINER_WIDTH, surface_factory=RasterSurface)
diagram = visualizer.render()

# %%
paths = save_diagram(OUT_DIR, diagram)
print(f'Saved {len(paths)} elements to {os.path.abspath(OUT_DIR)}')

# %%
# a config change replaces the snapshot and redraws everything
diagram = visualizer.on_configuration_changed(config.replace(conv_padding='same'))
print(shape_table(visualizer.config).to_string(index=False))

fig = diagram_figure(diagram)
fig.show()

# %%
# static svg with the configuration embedded, needs kaleido
svg = save_fig_with_cfg(OUT_DIR, fig, visualizer.config.to_dict())
print(f'Saved {svg}')
