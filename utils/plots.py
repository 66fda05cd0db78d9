import xml.etree.ElementTree as ET
from xml.dom import minidom
import json
import os
import re
from typing import List
import plotly.graph_objects as go
from plotly.subplots import make_subplots
from PIL.PngImagePlugin import PngInfo
from tqdm import tqdm
import pandas as pd
import numpy as np
from configuration import Configuration
from surfaces import RasterSurface
from visualizer import Diagram, ElementKind, RenderedElement, plan_elements

def shape_table(config: Configuration) -> pd.DataFrame:
    """
    One row per visual element, in drawing order.
    Columns ['Kind', 'Kernel', 'Height', 'Width', 'Depth', 'Valid', 'Label'].
    Height and Width are the computed shape, 0 where nothing fits.
    """
    rows = [{
        'Kind': element.kind.value,
        'Kernel': element.index,
        'Height': element.shape.height,
        'Width': element.shape.width,
        'Depth': element.depth,
        'Valid': element.valid,
        'Label': element.label,
    } for element in plan_elements(config)]

    df = pd.DataFrame(rows, columns=['Kind', 'Kernel', 'Height', 'Width', 'Depth', 'Valid', 'Label'])
    # nullable ints, the input and the summary belong to no kernel
    df['Kernel'] = df['Kernel'].astype('Int64')
    return df

def diagram_figure(diagram: Diagram, description: str = 'Convolution + Pooling') -> go.Figure:
    """
    All elements of a raster diagram in one plotly figure.
    First row: the input and the stacked summary. Then one row per kernel: kernel, convolution, pooling.
    """
    if not all(isinstance(rendered.surface, RasterSurface) for rendered in diagram):
        raise TypeError("Expected a diagram rendered on RasterSurfaces")

    kernels = diagram.by_kind(ElementKind.KERNEL)
    grid = [[None] * 3 for _ in range(1 + len(kernels))]
    grid[0][0] = diagram.by_kind(ElementKind.INPUT)[0]
    summary = diagram.by_kind(ElementKind.STACKED_SUMMARY)
    if summary:
        grid[0][1] = summary[0]
    for kind, col in ((ElementKind.KERNEL, 0), (ElementKind.CONV_OUTPUT, 1), (ElementKind.POOL_OUTPUT, 2)):
        for rendered in diagram.by_kind(kind):
            grid[1 + rendered.element.index][col] = rendered

    titles = [cell.label if cell is not None else '' for row in grid for cell in row]
    fig = make_subplots(rows=len(grid), cols=3, subplot_titles=titles)

    for i, row in enumerate(grid):
        for j, rendered in enumerate(row):
            if rendered is None:
                continue
            fig.add_trace(go.Image(z=np.asarray(rendered.surface.to_image())), row=i + 1, col=j + 1)

    fig.update_xaxes(visible=False)
    fig.update_yaxes(visible=False)
    fig.update_layout({
        'title': f'{description}: {diagram.config.input_size}×{diagram.config.input_size}×{diagram.config.channels} input, '
                 f'{diagram.config.kernel_count} kernels',
        'template': 'seaborn',
        'height': 300 * len(grid),
    })
    return fig

def _filename(position: int, rendered: RenderedElement, extension: str) -> str:
    name = re.sub(r'[^A-Za-z0-9]+', '_', rendered.label.replace('×', 'x')).strip('_')
    return f'{position:02d}_{name}.{extension}'

def save_png_with_cfg(dir: str, position: int, rendered: RenderedElement, config: Configuration) -> str:
    """
    Save one rendered element as a PNG file in dir, and embed the configuration as a text chunk.
    Returns the filename.
    """
    if not isinstance(rendered.surface, RasterSurface):
        raise TypeError(f"Expected a RasterSurface, got {type(rendered.surface)}")

    filename = os.path.join(dir, _filename(position, rendered, 'png'))
    metadata = PngInfo()
    metadata.add_text('configuration', json.dumps(config.to_dict(), indent=4, default=str))
    metadata.add_text('label', rendered.label)
    rendered.surface.to_image().save(filename, pnginfo=metadata)
    return filename

def save_diagram(dir: str, diagram: Diagram) -> List[str]:
    """Save every element of a raster diagram as a PNG with the configuration embedded."""
    os.makedirs(dir, exist_ok=True)
    return [save_png_with_cfg(dir, position, rendered, diagram.config)
            for position, rendered in enumerate(tqdm(diagram.elements, desc='Saving elements'))]

def embed_config_in_svg(filename: str, config: dict) -> None:
    """Insert the configuration as a <metadata> element, the first child of the svg root."""
    tree = ET.parse(filename)
    root = tree.getroot()
    metadata = ET.Element("metadata")
    metadata.text = json.dumps(config, indent=4, default=str)

    root.insert(0, metadata)

    # Generate formatted XML string and save it
    pretty_xml = minidom.parseString(ET.tostring(root)).toprettyxml(indent="  ")
    with open(filename, "w") as file:
        file.write(pretty_xml)

def save_fig_with_cfg(dir: str, fig: go.Figure, config: dict) -> str:
    """
    Save a plotly figure as an SVG file in dir, and embed the configuration as metadata.
    Needs kaleido for the static export.
    """
    title = fig.layout.title.text or 'diagram'
    filename = os.path.join(dir, f"{re.sub(r'[^A-Za-z0-9]+', '_', title.replace('×', 'x')).strip('_')}.svg")
    fig.write_image(filename)
    embed_config_in_svg(filename, config)
    return filename
