import logging

import numpy as np
import pytest

from loan_redistribution.config import Settings
from loan_redistribution.engine.optimizer import (
    OFF_PLANE_SCALE,
    NelderMeadMinimizer,
    sum_preserving_simplex,
)


class TestSumPreservingSimplex:
    def test_shape(self):
        sim = sum_preserving_simplex(np.array([1000.0, 1000.0, 1000.0]), [3], 0.05)
        assert sim.shape == (4, 3)

    def test_in_plane_edges_keep_sum(self):
        sim = sum_preserving_simplex(np.array([1000.0, 1000.0, 1000.0]), [3], 0.05)
        assert sim[1].sum() == pytest.approx(3000.0)
        assert sim[2].sum() == pytest.approx(3000.0)
        assert sim[3].sum() == pytest.approx(3000.0 + 50.0 * OFF_PLANE_SCALE)

    def test_blocks(self):
        x0 = np.array([1000.0, 1000.0, 200.0, 200.0])
        sim = sum_preserving_simplex(x0, [2, 2], 0.05)
        assert sim.shape == (5, 4)
        # Second block steps are scaled by its own magnitude
        assert sim[3][2:] == pytest.approx([210.0, 190.0])

    def test_vertices_affinely_independent(self):
        sim = sum_preserving_simplex(np.array([5.0, 5.0, 5.0, 0.0, 0.0]), [3, 2], 0.05)
        edges = sim[1:] - sim[0]
        assert np.linalg.matrix_rank(edges) == 5


class TestNelderMeadMinimizer:
    def test_quadratic(self):
        target = np.array([1.0, 2.0, 3.0])

        def f(x):
            return float(np.sum((x - target) ** 2))

        outcome = NelderMeadMinimizer().minimize(f, np.array([0.5, 0.5, 0.5]), [3])
        assert outcome.converged
        assert outcome.x == pytest.approx(target, abs=1e-4)
        assert outcome.evaluations > 0

    def test_non_negative(self):
        def f(x):
            return float(np.sum((x + 1.0) ** 2))

        outcome = NelderMeadMinimizer().minimize(f, np.array([2.0, 3.0]), [2])
        assert np.all(outcome.x >= 0.0)
        assert outcome.x == pytest.approx([0.0, 0.0], abs=1e-4)

    def test_budget_exhaustion_returns_best_point(self, caplog):
        def f(x):
            return float(np.sum((x - 100.0) ** 2))

        minimizer = NelderMeadMinimizer(Settings(max_evaluations=20))
        with caplog.at_level(logging.WARNING, logger="loan_redistribution.engine.optimizer"):
            outcome = minimizer.minimize(f, np.array([1.0, 1.0, 1.0]), [3])

        assert not outcome.converged
        assert outcome.value <= f(np.array([1.0, 1.0, 1.0]))
        assert "without converging" in caplog.text

    def test_deterministic(self):
        def f(x):
            return float((x[0] - 3.0) ** 2 + 10.0 * (x[1] - x[0]) ** 2)

        a = NelderMeadMinimizer().minimize(f, np.array([1.0, 1.0]), [2])
        b = NelderMeadMinimizer().minimize(f, np.array([1.0, 1.0]), [2])
        assert np.array_equal(a.x, b.x)
