"""Tests for the N-Queens board model."""

import random
import unittest
from concurrent.futures import ProcessPoolExecutor, ThreadPoolExecutor

from minconflicts.board import UNASSIGNED, NQueens
from minconflicts.constraints import angle_constraint, attack_constraint
from minconflicts.search import Conflict

DIRECTIONS = [(1, 0), (0, 1), (1, 1), (-1, 1), (1, 2), (2, 1), (-2, 3), (3, -1)]


def _brute_line(rows, x, y, dx, dy):
    """Count queens at (x + t*dx, y + t*dy), t != 0, straight from the row list."""
    count = 0
    for col, row in enumerate(rows):
        if row < 0:
            continue
        if dx == 0:
            if col != x or (row - y) % dy != 0:
                continue
            t = (row - y) // dy
        else:
            if (col - x) % dx != 0:
                continue
            t = (col - x) // dx
            if row != y + t * dy:
                continue
        if t != 0:
            count += 1
    return count


class BoardStateTests(unittest.TestCase):

    def test_starts_on_row_zero(self):
        board = NQueens(6)
        self.assertEqual(board.rows, (0,) * 6)
        self.assertEqual(board.size(), 6)
        self.assertEqual(board.n, 6)

    def test_rejects_empty_board(self):
        with self.assertRaises(ValueError):
            NQueens(0)

    def test_assign_and_unassign(self):
        board = NQueens(5)
        board.assign(2, 4)
        self.assertEqual(board.row_of(2), 4)
        self.assertEqual(board.unassign(2), 4)
        self.assertEqual(board.row_of(2), UNASSIGNED)
        board.assign(2, 1)
        self.assertEqual(board.rows, (0, 0, 1, 0, 0))

    def test_out_of_range_access(self):
        board = NQueens(4)
        with self.assertRaises(ValueError):
            board.assign(0, 4)
        with self.assertRaises(ValueError):
            board.assign(0, UNASSIGNED)
        with self.assertRaises(IndexError):
            board.unassign(-1)
        with self.assertRaises(IndexError):
            board.best_value_for(4)

    def test_set_rows_validates(self):
        board = NQueens(4)
        board.set_rows([1, 3, 0, 2])
        self.assertEqual(board.rows, (1, 3, 0, 2))
        with self.assertRaises(ValueError):
            board.set_rows([0, 1, 2])
        with self.assertRaises(ValueError):
            board.set_rows([0, 1, 2, 4])

    def test_set_constraints_keeps_assignment(self):
        board = NQueens(8, attack_constraint(8))
        board.set_rows([0, 4, 7, 5, 2, 6, 1, 3])
        board.set_constraints(attack_constraint(8), angle_constraint(2, 8))
        self.assertEqual(board.rows, (0, 4, 7, 5, 2, 6, 1, 3))
        self.assertEqual(len(board.constraints), 2)

    def test_render(self):
        board = NQueens(4)
        board.set_rows([1, 3, 0, 2])
        self.assertEqual(board.render(), "__Q_\nQ___\n___Q\n_Q__")
        self.assertEqual(str(board), board.render())

    def test_render_all_on_row_zero(self):
        lines = NQueens(3).render().splitlines()
        self.assertEqual(lines, ["QQQ", "___", "___"])


class LineCountTests(unittest.TestCase):

    def test_all_on_first_row(self):
        board = NQueens(10)
        self.assertEqual(board.line_count(0, 0, 1, 0), 9)
        self.assertEqual(board.line_count(0, 0, 0, 1), 0)
        self.assertEqual(board.line_count(0, 0, 1, 1), 0)
        self.assertEqual(board.line_count(0, 0, -1, 1), 0)

    def test_symmetric_and_excludes_query_point(self):
        rng = random.Random(11)
        n = 9
        board = NQueens(n)
        for _ in range(5):
            board.set_rows([rng.randrange(n) for _ in range(n)])
            rows = board.rows
            for x in range(n):
                for y in range(n):
                    for dx, dy in DIRECTIONS:
                        forward = board.line_count(x, y, dx, dy)
                        self.assertEqual(forward, board.line_count(x, y, -dx, -dy))
                        self.assertEqual(forward, _brute_line(rows, x, y, dx, dy))

    def test_ray_is_one_sided(self):
        board = NQueens(5)
        board.set_rows([0, 1, 2, 3, 4])
        self.assertEqual(board.ray_count(2, 2, 1, 1), 2)
        self.assertEqual(board.ray_count(2, 2, -1, -1), 2)
        self.assertEqual(board.line_count(2, 2, 1, 1), 4)


class ConflictScanTests(unittest.TestCase):

    def _random_boards(self, n, count, seed):
        rng = random.Random(seed)
        board = NQueens(n, attack_constraint(n), angle_constraint(2, n), rng=rng)
        for _ in range(count):
            board.set_rows([rng.randrange(n) for _ in range(n)])
            yield board

    def test_report_matches_per_column_counts(self):
        for board in self._random_boards(8, 30, seed=3):
            expected = [
                Conflict(col, board.conflict_count(col, board.row_of(col)))
                for col in range(board.n)
                if board.conflict_count(col, board.row_of(col)) != 0
            ]
            self.assertEqual(board.all_conflicts(), expected)
            self.assertEqual(board.conflicts(), expected)

    def test_empty_report_for_solution(self):
        board = NQueens(8, attack_constraint(8), angle_constraint(2, 8))
        board.set_rows([0, 4, 7, 5, 2, 6, 1, 3])
        self.assertEqual(board.all_conflicts(), [])
        for col in range(8):
            self.assertEqual(board.conflict_count(col, board.row_of(col)), 0)

    def test_all_on_first_row_attack(self):
        board = NQueens(10, attack_constraint(10))
        report = board.all_conflicts()
        self.assertEqual(len(report), 10)
        self.assertTrue(all(c.conflicts == 9 for c in report))

    def test_best_value_is_a_minimiser(self):
        for board in self._random_boards(8, 20, seed=5):
            for col in range(board.n):
                board.unassign(col)
                value, cost = board.best_value_for(col)
                costs = [board.conflict_count(col, row) for row in range(board.n)]
                self.assertEqual(cost, min(costs))
                self.assertEqual(costs[value], cost)
                board.assign(col, value)

    def test_ties_are_broken_randomly(self):
        board = NQueens(6, rng=random.Random(1))
        seen = {board.best_value_for(0)[0] for _ in range(300)}
        self.assertEqual(seen, set(range(6)))

    def test_unique_minimum_skips_random_draw(self):
        class Strict(random.Random):
            def randrange(self, *args, **kwargs):
                raise AssertionError("no draw expected")

        board = NQueens(4, attack_constraint(4), rng=Strict())
        board.set_rows([1, 3, 0, 2])
        board.unassign(0)
        self.assertEqual(board.best_value_for(0), (1, 0))

    def test_rejects_process_pool(self):
        with ProcessPoolExecutor(max_workers=1) as executor:
            with self.assertRaises(TypeError):
                NQueens(4, attack_constraint(4), executor=executor)

    def test_executor_matches_sequential(self):
        n = 10
        rng = random.Random(9)
        rows = [rng.randrange(n) for _ in range(n)]
        plain = NQueens(n, attack_constraint(n), angle_constraint(2, n), rng=random.Random(4))
        plain.set_rows(rows)
        with ThreadPoolExecutor(max_workers=4) as executor:
            pooled = NQueens(
                n, attack_constraint(n), angle_constraint(2, n), rng=random.Random(4), executor=executor
            )
            pooled.set_rows(rows)
            self.assertEqual(pooled.all_conflicts(), plain.all_conflicts())
            for col in range(n):
                self.assertEqual(pooled.best_value_for(col), plain.best_value_for(col))


if __name__ == "__main__":
    unittest.main()
