"""SVG page showing a cubic Bezier curve together with its biarc approximation."""

from __future__ import annotations

import copy
import gzip
import io
from typing import Iterable, Optional, Union

import svgwrite
import svgwrite.base
import svgwrite.elementfactory
from svgwrite.extensions import Inkscape

from biarc.arc import BiArc
from biarc.bezier import CubicBezier
from biarc.common import InvalidParameterError


class BiArcSvgPage:
    """A page (canvas) described by SVG to draw curves and biarcs on.

    The viewbox uses the coordinates of the curves directly (x to the right, y downwards
    as usual for screen coordinates).
    Contains groups/layers:
        - root       -- (group) all layers
            - main   -- editable->locked=False  --  hidden->display="block"
            - debug  -- editable->locked=False  --  hidden->display="none"
    """

    def __init__(
        # pylint: disable=too-many-arguments,too-many-positional-arguments
        self,
        width: float,
        height: float,
        viewbox_x: float = 0.0,
        viewbox_y: float = 0.0,
        viewbox_width: Optional[float] = None,
        viewbox_height: Optional[float] = None,
    ):
        """
        Initialize the SVG page.

        Args:
            width (float): The width of the canvas in user units (px).
            height (float): The height of the canvas in user units (px).
            viewbox_x (float, optional): x-coordinate of the viewbox's top-left point. Defaults to 0.
            viewbox_y (float, optional): y-coordinate of the viewbox's top-left point. Defaults to 0.
            viewbox_width (float, optional): width of the viewbox. Defaults to _width_.
            viewbox_height (float, optional): height of the viewbox. Defaults to _height_.
        """
        if width <= 0 or height <= 0:
            raise InvalidParameterError(f"Page size must be positive, got {width} x {height}")
        vb_width = width if viewbox_width is None else viewbox_width
        vb_height = height if viewbox_height is None else viewbox_height

        # profile="full" to support numbers with more than 4 decimal digits
        self.drawing = svgwrite.Drawing(
            size=(width, height),
            viewBox=f"{viewbox_x} {viewbox_y} {vb_width} {vb_height}",
            profile="full",
        )

        # Initialize Inkscape extension for layer support
        self._inkscape = Inkscape(self.drawing)

        self.main_layer = self._inkscape.layer(label="main", locked=False)
        self.debug_layer = self._inkscape.layer(label="debug", locked=False, display="none")

    @classmethod
    def for_curve(cls, curve: CubicBezier, margin: float = 10.0) -> BiArcSvgPage:
        """Create a page whose viewbox contains all control points of _curve_ plus _margin_."""
        xmin, ymin = curve.points.min(axis=0)
        xmax, ymax = curve.points.max(axis=0)
        width = float(xmax - xmin) + 2 * margin
        height = float(ymax - ymin) + 2 * margin
        return cls(width, height, float(xmin) - margin, float(ymin) - margin)

    def add(
        self,
        element: Union[svgwrite.base.BaseElement, svgwrite.elementfactory.ElementBuilder],
        add_to_debug_layer: bool = False,
    ) -> Union[svgwrite.base.BaseElement, svgwrite.elementfactory.ElementBuilder]:
        """Add a SVG element as subelement either to main or debug layer.

        Args:
            element (svgwrite.base.BaseElement): append this SVG element
            add_to_debug_layer (bool, optional): True if element should be added to debug layer.
                Defaults to False.

        Returns:
            svgwrite.base.BaseElement: the added element
        """
        if add_to_debug_layer:
            return self.debug_layer.add(element)
        return self.main_layer.add(element)

    def add_cubic_bezier(
        self,
        curve: CubicBezier,
        stroke: str = "black",
        stroke_width: float = 2.0,
        add_to_debug_layer: bool = False,
    ) -> svgwrite.base.BaseElement:
        """Add the _curve_ as SVG cubic path."""
        (x1, y1), (cx1, cy1), (cx2, cy2), (x2, y2) = curve.points
        path = self.drawing.path(
            d=f"M {x1} {y1} C {cx1} {cy1} {cx2} {cy2} {x2} {y2}",
            stroke=stroke,
            stroke_width=stroke_width,
            fill="none",
        )
        return self.add(path, add_to_debug_layer)

    def add_biarcs(
        self,
        biarcs: Iterable[BiArc],
        stroke: str = "red",
        stroke_width: float = 1.0,
        add_to_debug_layer: bool = False,
    ) -> int:
        """
        Add each biarc as one SVG path consisting of two arc commands.

        Returns:
            int: number of added paths
        """
        count = 0
        for biarc in biarcs:
            path = self.drawing.path(
                d=biarc.svg_path_string(),
                stroke=stroke,
                stroke_width=stroke_width,
                fill="none",
            )
            self.add(path, add_to_debug_layer)
            count += 1
        return count

    def add_biarc_circles(self, biarcs: Iterable[BiArc], stroke: str = "green", stroke_width: float = 0.5) -> int:
        """
        Add the full circles of all (non-straight) arcs to the debug layer.

        Returns:
            int: number of added circles
        """
        count = 0
        for biarc in biarcs:
            for arc in (biarc.a1, biarc.a2):
                if arc.center is None:
                    continue
                circle = self.drawing.circle(
                    center=(float(arc.center[0]), float(arc.center[1])),
                    r=arc.radius,
                    stroke=stroke,
                    stroke_width=stroke_width,
                    fill="none",
                )
                self.add(circle, add_to_debug_layer=True)
                count += 1
        return count

    def to_string(self, include_debug_layer: bool = False, pretty: bool = False, indent: int = 2) -> str:
        """Return the SVG document as string, the debug layer (if included) below the main layer.

        The page itself stays unchanged, so it can be written several times.
        """
        drawing = copy.deepcopy(self.drawing)
        root_group = drawing.add(self.drawing.g(id="root"))
        if include_debug_layer:
            root_group.add(self.debug_layer)
        root_group.add(self.main_layer)

        svg_buffer = io.StringIO()
        drawing.write(svg_buffer, pretty=pretty, indent=indent)
        return svg_buffer.getvalue()

    def save_as(
        self,
        filename: str,
        include_debug_layer: bool = False,
        pretty: bool = False,
        indent: int = 2,
        compressed: bool = False,
    ):
        """Save as SVG file

        Args:
            filename (str): path and filename
            include_debug_layer (bool, optional): True if file should contain debug_layer. Defaults to False.
            pretty (bool, optional): True for easy readable output. Defaults to False.
            indent (int, optional): Indention if pretty is enabled. Defaults to 2 spaces.
            compressed (bool, optional): Save as compressed svgz-file. Defaults to False.
        """
        output_data = self.to_string(include_debug_layer, pretty, indent).encode("utf-8")
        if compressed:
            output_data = gzip.compress(output_data)

        with open(filename, "wb") as svg_file:
            svg_file.write(output_data)

