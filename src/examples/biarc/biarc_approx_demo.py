#!/usr/bin/env python3
"""Approximate the reference cubic Bezier curves by biarcs and save the result as SVG."""

import logging
import os
from typing import Dict

from biarc.approximator import BiArcApproximator
from biarc.bezier import CubicBezier
from biarc.svg_export import BiArcSvgPage

# Reference curves in screen coordinates (y downwards)
DEMO_CURVES: Dict[str, CubicBezier] = {
    # no inflexion point
    "no_inflexion_1": CubicBezier((100, 500), (150, 100), (500, 150), (350, 350)),
    "no_inflexion_2": CubicBezier((100, 500), (250, 350), (450, 350), (500, 500)),
    # one inflexion point
    "one_inflexion": CubicBezier((150, 500), (100, 100), (500, 350), (350, 150)),
    # two inflexion points
    "two_inflexions": CubicBezier((100, 500), (350, 100), (100, 200), (500, 400)),
}


def main(output_dir: str = "data/output/example/svg/biarc", sampling_step: float = 5.0, tolerance: float = 1.0):
    """Main"""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    os.makedirs(output_dir, exist_ok=True)
    approximator = BiArcApproximator()

    for name, curve in DEMO_CURVES.items():
        result = approximator.approximate_with_report(curve, sampling_step, tolerance)
        print(
            f"{name:>15}: {len(result.biarcs):3d} biarcs, "
            f"{result.subdivisions:3d} subdivisions, max error {result.max_error:.4f}"
        )

        svg_page = BiArcSvgPage.for_curve(curve, margin=20.0)
        svg_page.add_cubic_bezier(curve, add_to_debug_layer=True)
        svg_page.add_biarc_circles(result.biarcs)
        svg_page.add_biarcs(result.biarcs)

        output_filename = os.path.join(output_dir, f"biarc_approx_{name}.svg")
        print(f"save file {output_filename} ...")
        svg_page.save_as(output_filename, include_debug_layer=True, pretty=True, indent=2)
    print("save done.")


if __name__ == "__main__":
    main()
