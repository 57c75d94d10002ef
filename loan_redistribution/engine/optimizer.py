"""Derivative-free minimization of the redistribution penalties.

Nelder-Mead via scipy. The initial simplex is laid out along directions that
keep each block's sum unchanged, with a single short edge leaving that plane,
so the first reflections explore the shape terms instead of being thrown back
by the hard sum penalties.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Protocol, Sequence

import numpy as np
from scipy.optimize import minimize

from loan_redistribution.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)

OFF_PLANE_SCALE = 1e-4  # Edge across the sum plane, relative to the in-plane edge
ADAPTIVE_MIN_DIMENSION = 5


@dataclass(frozen=True)
class OptimizationOutcome:
    x: np.ndarray
    value: float
    evaluations: int
    restarts: int
    converged: bool


class Minimizer(Protocol):
    def minimize(
        self,
        func: Callable[[np.ndarray], float],
        x0: np.ndarray,
        blocks: Sequence[int],
    ) -> OptimizationOutcome:
        ...


def sum_preserving_simplex(x0: np.ndarray, blocks: Sequence[int], step_fraction: float) -> np.ndarray:
    """(d+1, d) simplex around x0.

    Within each block, edges move one unit of value from a coordinate to its
    neighbour; the block's last edge steps off the sum plane by a small amount.
    """
    x0 = np.asarray(x0, dtype=float)
    vertices = [x0.copy()]
    start = 0
    for size in blocks:
        block = x0[start:start + size]
        step = step_fraction * max(float(np.abs(block).mean()), 1.0)
        for k in range(size - 1):
            v = x0.copy()
            v[start + k] += step
            v[start + k + 1] -= step
            vertices.append(v)
        v = x0.copy()
        v[start + size - 1] += step * OFF_PLANE_SCALE
        vertices.append(v)
        start += size
    return np.array(vertices)


class NelderMeadMinimizer:
    """Bounded Nelder-Mead with restarts from the best point.

    The evaluation budget is shared by all restarts. Running out of budget is
    not an error: the best point found is returned with converged=False.
    """

    def __init__(self, config: Settings | None = None):
        config = config or default_settings
        self.max_evaluations = config.max_evaluations
        self.max_restarts = config.max_restarts
        self.fatol = config.fatol
        self.xatol = config.xatol
        self.step_fraction = config.simplex_step

    def minimize(
        self,
        func: Callable[[np.ndarray], float],
        x0: np.ndarray,
        blocks: Sequence[int],
    ) -> OptimizationOutcome:
        dim = len(x0)
        bounds = [(0.0, None)] * dim
        best_x = np.maximum(np.asarray(x0, dtype=float), 0.0)
        best_value = float("inf")
        evaluations = 0
        restarts = 0
        converged = False

        for attempt in range(self.max_restarts + 1):
            remaining = self.max_evaluations - evaluations
            if remaining <= 0:
                break
            res = minimize(
                func,
                best_x,
                method="Nelder-Mead",
                bounds=bounds,
                options={
                    "maxfev": remaining,
                    "maxiter": remaining,
                    "fatol": self.fatol,
                    "xatol": self.xatol,
                    "adaptive": dim >= ADAPTIVE_MIN_DIMENSION,
                    "initial_simplex": sum_preserving_simplex(best_x, blocks, self.step_fraction),
                },
            )
            evaluations += int(res.nfev)
            restarts = attempt
            converged = bool(res.success)
            logger.debug(
                "Nelder-Mead run %d: value=%.6g nfev=%d status=%d",
                attempt, res.fun, res.nfev, res.status,
            )

            improvement = best_value - float(res.fun)
            if float(res.fun) < best_value:
                best_x, best_value = np.asarray(res.x, dtype=float), float(res.fun)
            if not converged or improvement <= self.fatol:
                break

        if not converged:
            logger.warning(
                "Optimizer stopped without converging after %d evaluations (penalty %.6g); "
                "using best point found",
                evaluations, best_value,
            )

        return OptimizationOutcome(
            x=best_x,
            value=best_value,
            evaluations=evaluations,
            restarts=restarts,
            converged=converged,
        )
