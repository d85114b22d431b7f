"""Tests for the restarting solve loop."""

import random
import unittest
from concurrent.futures import ThreadPoolExecutor

from minconflicts.constraints import (
    angle_constraint,
    attack_constraint,
    build_constraints,
    collinear_constraint,
)
from minconflicts.solver import default_max_iter, solve
from minconflicts.utils import is_valid_solution, max_collinear, max_on_origin_line


class SolveTests(unittest.TestCase):

    def test_default_budget(self):
        self.assertEqual(default_max_iter(10), 500)
        self.assertEqual(default_max_iter(4), 32)
        self.assertEqual(default_max_iter(1), 1)

    def test_attack_solves_from_four_up(self):
        for n in range(4, 13):
            result = solve(n, [attack_constraint(n)], rng=random.Random(n))
            self.assertTrue(result.solved, f"N={n}")
            self.assertFalse(result.timeout)
            self.assertTrue(is_valid_solution(list(result.board.rows)), f"N={n}")
            self.assertEqual(result.board.all_conflicts(), [])

    def test_single_queen(self):
        result = solve(1, build_constraints(1, collinear=True), rng=random.Random(0))
        self.assertTrue(result.solved)
        self.assertEqual(result.board.rows, (0,))
        self.assertEqual(result.retries, 0)
        # One confirming step per constraint layer.
        self.assertEqual(result.iterations, 3)
        self.assertEqual(result.steps, 3)

    def test_single_queen_with_one_step_budget(self):
        result = solve(1, build_constraints(1), max_iter=1, rng=random.Random(0), max_retries=0)
        self.assertTrue(result.solved)
        self.assertEqual(result.retries, 0)

    def test_expired_time_limit_counts_no_iterations(self):
        result = solve(8, [attack_constraint(8)], rng=random.Random(0), time_limit=-1.0)
        self.assertFalse(result.solved)
        self.assertTrue(result.timeout)
        self.assertEqual(result.iterations, 0)
        self.assertEqual(result.steps, 0)

    def test_no_constraints(self):
        result = solve(6, [], rng=random.Random(0))
        self.assertTrue(result.solved)
        self.assertEqual(result.iterations, 0)
        self.assertEqual(result.steps, 0)
        self.assertEqual(result.board.rows, (0,) * 6)

    def test_attack_and_angle(self):
        n = 10
        result = solve(n, [attack_constraint(n), angle_constraint(2, n)], rng=random.Random(2))
        rows = list(result.board.rows)
        self.assertTrue(result.solved)
        self.assertTrue(is_valid_solution(rows))
        self.assertLessEqual(max_on_origin_line(rows), 2)

    def test_attack_and_collinear(self):
        n = 8
        result = solve(n, [attack_constraint(n), collinear_constraint(3, n)], rng=random.Random(6))
        rows = list(result.board.rows)
        self.assertTrue(result.solved)
        self.assertTrue(is_valid_solution(rows))
        self.assertLessEqual(max_collinear(rows), 3)

    def test_layers_leave_final_set_active(self):
        n = 8
        constraints = [attack_constraint(n), angle_constraint(2, n)]
        result = solve(n, constraints, rng=random.Random(4))
        self.assertEqual(result.board.constraints, tuple(constraints))

    def test_retry_cap_stops_unsolved(self):
        result = solve(8, [attack_constraint(8)], max_iter=1, rng=random.Random(0), max_retries=0)
        self.assertFalse(result.solved)
        self.assertTrue(result.timeout)
        self.assertEqual(result.retries, 1)
        self.assertEqual(result.steps, 1)

    def test_restarts_are_counted(self):
        result = solve(8, [attack_constraint(8)], max_iter=3, rng=random.Random(1), max_retries=4)
        self.assertFalse(result.solved)
        self.assertEqual(result.retries, 5)
        self.assertEqual(result.steps, 15)

    def test_seeded_runs_are_reproducible(self):
        first = solve(10, [attack_constraint(10)], rng=random.Random(17))
        second = solve(10, [attack_constraint(10)], rng=random.Random(17))
        self.assertEqual(first.board.rows, second.board.rows)
        self.assertEqual(first.steps, second.steps)

    def test_executor_does_not_change_the_search(self):
        plain = solve(10, [attack_constraint(10)], rng=random.Random(23))
        with ThreadPoolExecutor(max_workers=3) as executor:
            pooled = solve(10, [attack_constraint(10)], rng=random.Random(23), executor=executor)
        self.assertEqual(plain.board.rows, pooled.board.rows)
        self.assertEqual(plain.steps, pooled.steps)


if __name__ == "__main__":
    unittest.main()
