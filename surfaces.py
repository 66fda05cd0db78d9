#surfaces.py
"""
Drawing surfaces for the renderer.
A surface is resized (which clears it) and then drawn on with three primitives: fill_rect, stroke_rect and fill_text.
Coordinates are pixels, origin top left, y pointing down.
A rectangle (x, y, w, h) covers the pixels x..x+w-1 and y..y+h-1, so stroking it draws a border `line_width` pixels thick inside that area.

RasterSurface draws into a Pillow image, FigureSurface collects plotly shapes for an interactive figure.
"""

from functools import lru_cache
from PIL import Image, ImageDraw, ImageFont
import plotly.graph_objects as go

ALIGNS = ('left', 'center', 'right')
BASELINES = ('top', 'middle', 'bottom')

class Surface:
    """Base class of all drawing surfaces. New surfaces start 300x150, like an html canvas."""

    def __init__(self, width: int = 300, height: int = 150) -> None:
        self.resize(width, height)

    def resize(self, width: int, height: int) -> None:
        """Set the pixel dimensions. Clears everything drawn so far."""
        if width <= 0 or height <= 0:
            raise ValueError(f"Expected a positive surface size, got {width}x{height}")
        self.width = width
        self.height = height

    def fill_rect(self, x: int, y: int, w: int, h: int, color: str) -> None:
        raise NotImplementedError("Each surface must implement fill_rect.")

    def stroke_rect(self, x: int, y: int, w: int, h: int, color: str, line_width: int = 1) -> None:
        raise NotImplementedError("Each surface must implement stroke_rect.")

    def fill_text(self, text: str, x: int, y: int, color: str, size: int, align: str = 'left', baseline: str = 'top') -> None:
        raise NotImplementedError("Each surface must implement fill_text.")

    @staticmethod
    def _check_anchor(align: str, baseline: str) -> None:
        if align not in ALIGNS:
            raise ValueError(f"Expected align in {ALIGNS}, got '{align}'")
        if baseline not in BASELINES:
            raise ValueError(f"Expected baseline in {BASELINES}, got '{baseline}'")

@lru_cache(maxsize=None)
def _font(size: int) -> ImageFont.FreeTypeFont:
    return ImageFont.load_default(size=size)

class RasterSurface(Surface):
    """Pillow backed surface. Pixel exact, used for tests and png export."""

    def resize(self, width: int, height: int) -> None:
        super().resize(width, height)
        self.image = Image.new('RGB', (width, height), 'white')
        self._draw = ImageDraw.Draw(self.image)

    def fill_rect(self, x: int, y: int, w: int, h: int, color: str) -> None:
        if w <= 0 or h <= 0:
            return
        self._draw.rectangle([x, y, x + w - 1, y + h - 1], fill=color)

    def stroke_rect(self, x: int, y: int, w: int, h: int, color: str, line_width: int = 1) -> None:
        if w <= 0 or h <= 0:
            return
        self._draw.rectangle([x, y, x + w - 1, y + h - 1], outline=color, width=line_width)

    def fill_text(self, text: str, x: int, y: int, color: str, size: int, align: str = 'left', baseline: str = 'top') -> None:
        self._check_anchor(align, baseline)
        font = _font(size)
        left, top, right, bottom = self._draw.textbbox((0, 0), text, font=font)

        if align == 'left':
            x0 = x - left
        elif align == 'center':
            x0 = x - (left + right) / 2
        else:
            x0 = x - right

        if baseline == 'top':
            y0 = y - top
        elif baseline == 'middle':
            y0 = y - (top + bottom) / 2
        else:
            y0 = y - bottom

        self._draw.text((x0, y0), text, fill=color, font=font)

    def to_image(self) -> Image.Image:
        """a copy of the current pixels"""
        return self.image.copy()

    def tobytes(self) -> bytes:
        return self.image.tobytes()

class FigureSurface(Surface):
    """
    Plotly backed surface. Every primitive becomes a layout shape or annotation.
    Shapes are collected in lists and only turned into a go.Figure when `figure` is read,
    adding hundreds of shapes one by one to a live figure is slow.
    """

    def resize(self, width: int, height: int) -> None:
        super().resize(width, height)
        self.shapes = []
        self.annotations = []

    def fill_rect(self, x: int, y: int, w: int, h: int, color: str) -> None:
        if w <= 0 or h <= 0:
            return
        self.shapes.append(dict(type='rect', x0=x, y0=y, x1=x + w, y1=y + h,
                                fillcolor=color, line=dict(width=0), layer='below'))

    def stroke_rect(self, x: int, y: int, w: int, h: int, color: str, line_width: int = 1) -> None:
        if w <= 0 or h <= 0:
            return
        # plotly strokes are centered on the path, shift by half the line width to stay inside the rectangle
        inset = line_width / 2
        self.shapes.append(dict(type='rect', x0=x + inset, y0=y + inset, x1=x + w - inset, y1=y + h - inset,
                                line=dict(color=color, width=line_width)))

    def fill_text(self, text: str, x: int, y: int, color: str, size: int, align: str = 'left', baseline: str = 'top') -> None:
        self._check_anchor(align, baseline)
        self.annotations.append(dict(x=x, y=y, text=text, showarrow=False,
                                     font=dict(size=size, color=color),
                                     xanchor=align, yanchor=baseline))

    @property
    def figure(self) -> go.Figure:
        return go.Figure(layout={
            'width': self.width,
            'height': self.height,
            'margin': dict(l=0, r=0, t=0, b=0),
            'plot_bgcolor': 'white',
            'paper_bgcolor': 'white',
            'showlegend': False,
            'xaxis': dict(range=[0, self.width], visible=False),
            # y points down, like on a canvas
            'yaxis': dict(range=[self.height, 0], visible=False),
            'shapes': self.shapes,
            'annotations': self.annotations,
        })
