"""Approximation of cubic Bezier curves by a sequence of biarcs.

The curve is first split at its real inflexion points, so every fragment bends
in only one direction. Each fragment is then approximated by a single biarc;
fragments whose biarc deviates more than the tolerance are split at the point
of maximum deviation and processed again.
"""

from __future__ import annotations

import logging
import math
import numbers
from dataclasses import dataclass, field
from typing import List, Tuple

import numpy as np

from biarc.arc import BiArc
from biarc.bezier import CubicBezier
from biarc.common import InvalidParameterError
from biarc.consts import (
    DEFAULT_MAX_DEPTH,
    DEFAULT_MAX_SAMPLES,
    DEFAULT_MAX_SUBDIVISIONS,
    DEFAULT_SAMPLING_STEP,
    DEFAULT_TOLERANCE,
)

logger = logging.getLogger(__name__)


###############################################################################
# CurveFragment
###############################################################################
@dataclass(frozen=True)
class CurveFragment:
    """
    Part of the original curve waiting to be approximated.

    Attributes:
        curve (CubicBezier): the fragment as independent cubic Bezier curve
        t_start (float): parameter of the fragment's start on the original curve
        t_end (float): parameter of the fragment's end on the original curve
        depth (int): number of splits that led to this fragment
    """

    curve: CubicBezier
    t_start: float = 0.0
    t_end: float = 1.0
    depth: int = 0

    def split(self, t: float) -> Tuple[CurveFragment, CurveFragment]:
        """Split at the local parameter _t_ and map the parts onto the original parameter range."""
        left, right = self.curve.split(t)
        t_mid = self.t_start + t * (self.t_end - self.t_start)
        return (
            CurveFragment(left, self.t_start, t_mid, self.depth + 1),
            CurveFragment(right, t_mid, self.t_end, self.depth + 1),
        )


###############################################################################
# ApproximationResult
###############################################################################
@dataclass
class ApproximationResult:
    """
    Outcome of one approximation run.

    All lists are ordered along the original curve from its start to its end point.

    Attributes:
        biarcs (List[BiArc]): the accepted biarcs
        intervals (List[Tuple[float, float]]): parameter range of the original curve per biarc
        errors (List[float]): maximum sampled deviation per biarc
        subdivisions (int): number of splits done during the adaptive phase
        non_converged (List[Tuple[float, float]]): ranges accepted without meeting the tolerance
    """

    biarcs: List[BiArc] = field(default_factory=list)
    intervals: List[Tuple[float, float]] = field(default_factory=list)
    errors: List[float] = field(default_factory=list)
    subdivisions: int = 0
    non_converged: List[Tuple[float, float]] = field(default_factory=list)

    @property
    def converged(self) -> bool:
        """bool: True if every biarc meets the tolerance."""
        return not self.non_converged

    @property
    def max_error(self) -> float:
        """float: largest sampled deviation over all biarcs."""
        return max(self.errors, default=0.0)


###############################################################################
# BiArcApproximator
###############################################################################
@dataclass(frozen=True)
class BiArcApproximator:
    """
    Approximates cubic Bezier curves by biarcs.

    The approximator only holds its configuration, so one instance can serve
    any number of (concurrent) calls.

    Attributes:
        max_depth (int): maximum number of nested splits of a single fragment
        max_subdivisions (int): maximum number of splits per approximation call
        max_samples (int): maximum number of sampling steps per fragment
    """

    max_depth: int = DEFAULT_MAX_DEPTH
    max_subdivisions: int = DEFAULT_MAX_SUBDIVISIONS
    max_samples: int = DEFAULT_MAX_SAMPLES

    def __post_init__(self):
        if self.max_depth < 0:
            raise InvalidParameterError(f"max_depth must be non-negative, got {self.max_depth}")
        if self.max_subdivisions < 0:
            raise InvalidParameterError(f"max_subdivisions must be non-negative, got {self.max_subdivisions}")
        if self.max_samples < 1:
            raise InvalidParameterError(f"max_samples must be positive, got {self.max_samples}")

    @staticmethod
    def split_at_inflexions(curve: CubicBezier) -> List[CurveFragment]:
        """
        Split the _curve_ at its real inflexion points.

        Inflexion points at the same parameter are split once. For two inflexion points
        t1 < t2 the second one is projected onto the right part of the first split:
            t2' = (t2 - t1) / (1 - t1)

        Returns:
            List[CurveFragment]: one to three fragments ordered from start to end
        """
        whole = CurveFragment(curve)
        params = sorted({root.t for root in curve.inflexion_points if root.is_real_inflexion})

        if not params:
            logger.debug("No inflexion point, curve is approximated as a whole")
            return [whole]

        left, right = whole.split(params[0])
        if len(params) == 1:
            logger.debug("Split at inflexion point t=%g", params[0])
            return [left, right]

        t1, t2 = params
        middle, last = right.split((t2 - t1) / (1.0 - t1))
        logger.debug("Split at inflexion points t1=%g, t2=%g", t1, t2)
        return [left, middle, last]

    @staticmethod
    def max_deviation(
        curve: CubicBezier,
        biarc: BiArc,
        sampling_step: float,
        max_samples: int = DEFAULT_MAX_SAMPLES,
    ) -> Tuple[float, float]:
        """
        Estimate the deviation of the _biarc_ from the _curve_ by sampling.

        ceil(length / sampling_step) steps of uniform parameter size are checked, both end
        points included, where length is the larger one of the biarc length and the control
        polygon length of the curve. The latter bounds the curve length from above, so loops
        with close end points (and a short biarc) are sampled densely enough.
        The distance at parameter t is measured between biarc.point_at(t) and curve.point_at(t).

        Args:
            curve (CubicBezier): the (fragment of the) curve
            biarc (BiArc): the biarc approximating _curve_
            sampling_step (float): distance between two sampling points
            max_samples (int, optional): upper limit of the number of steps.
                Defaults to DEFAULT_MAX_SAMPLES.

        Returns:
            Tuple[float, float]: maximum distance and the (first) parameter where it occurs
        """
        length = max(biarc.length, curve.control_length)
        steps = min(max(1, math.ceil(length / sampling_step)), max_samples)
        t = np.linspace(0.0, 1.0, steps + 1, dtype=np.float64)
        diffs = biarc.point_at(t) - curve.point_at(t)
        distances = np.hypot(diffs[:, 0], diffs[:, 1])
        index = int(np.argmax(distances))
        return float(distances[index]), float(t[index])

    def approximate_with_report(
        self,
        curve: CubicBezier,
        sampling_step: float = DEFAULT_SAMPLING_STEP,
        tolerance: float = DEFAULT_TOLERANCE,
    ) -> ApproximationResult:
        """
        Approximate the _curve_ by biarcs and report how the approximation went.

        Args:
            curve (CubicBezier): the curve to approximate
            sampling_step (float, optional): distance between the points used to measure the
                deviation; smaller is more accurate but slower. Defaults to DEFAULT_SAMPLING_STEP.
            tolerance (float, optional): maximum accepted deviation. Defaults to DEFAULT_TOLERANCE.

        Returns:
            ApproximationResult: biarcs ordered from the curve's start to its end point

        Raises:
            InvalidParameterError: if _sampling_step_ or _tolerance_ is not a positive finite number
        """
        _check_positive("sampling_step", sampling_step)
        _check_positive("tolerance", tolerance)

        # LIFO work stack, leftmost fragment on top
        fragments = list(reversed(self.split_at_inflexions(curve)))

        accepted: List[Tuple[CurveFragment, BiArc, float]] = []
        non_converged: List[Tuple[float, float]] = []
        subdivisions = 0

        while fragments:
            fragment = fragments.pop()
            biarc = BiArc.from_cubic_bezier(fragment.curve)
            max_distance, max_distance_at = self.max_deviation(fragment.curve, biarc, sampling_step, self.max_samples)

            if max_distance > tolerance:
                if fragment.depth < self.max_depth and subdivisions < self.max_subdivisions:
                    if not 0.0 < max_distance_at < 1.0:
                        max_distance_at = 0.5
                    left, right = fragment.split(max_distance_at)
                    fragments.append(right)
                    fragments.append(left)
                    subdivisions += 1
                    continue

                logger.warning(
                    "No convergence for t in [%g, %g]: deviation %g exceeds tolerance %g "
                    "(depth %d, subdivisions %d). Accepting best effort.",
                    fragment.t_start,
                    fragment.t_end,
                    max_distance,
                    tolerance,
                    fragment.depth,
                    subdivisions,
                )
                non_converged.append((fragment.t_start, fragment.t_end))

            accepted.append((fragment, biarc, max_distance))

        accepted.sort(key=lambda item: item[0].t_start)
        logger.debug("Approximated curve by %d biarcs after %d subdivisions", len(accepted), subdivisions)

        return ApproximationResult(
            biarcs=[biarc for _, biarc, _ in accepted],
            intervals=[(fragment.t_start, fragment.t_end) for fragment, _, _ in accepted],
            errors=[error for _, _, error in accepted],
            subdivisions=subdivisions,
            non_converged=sorted(non_converged),
        )

    def approximate(
        self,
        curve: CubicBezier,
        sampling_step: float = DEFAULT_SAMPLING_STEP,
        tolerance: float = DEFAULT_TOLERANCE,
    ) -> List[BiArc]:
        """Approximate the _curve_ by biarcs, see approximate_with_report()."""
        return self.approximate_with_report(curve, sampling_step, tolerance).biarcs


def approx_cubic_bezier(
    curve: CubicBezier,
    sampling_step: float = DEFAULT_SAMPLING_STEP,
    tolerance: float = DEFAULT_TOLERANCE,
) -> List[BiArc]:
    """Approximate the _curve_ by biarcs using the default guard configuration."""
    return BiArcApproximator().approximate(curve, sampling_step, tolerance)


def _check_positive(name: str, value: float) -> None:
    if isinstance(value, bool) or not isinstance(value, numbers.Real) or not math.isfinite(value) or value <= 0:
        raise InvalidParameterError(f"{name} must be a positive finite number, got {value!r}")
