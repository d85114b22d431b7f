"""Tests for the single-board command-line entry point."""

import io
import unittest
from contextlib import redirect_stderr, redirect_stdout

from minconflicts.cli import main
from minconflicts.utils import is_valid_solution


def _run(argv):
    out, err = io.StringIO(), io.StringIO()
    with redirect_stdout(out), redirect_stderr(err):
        main(argv)
    return out.getvalue(), err.getvalue()


def _rows_from_render(lines):
    return [next(row for row, line in enumerate(lines) if line[col] == "Q") for col in range(len(lines))]


class CliTests(unittest.TestCase):

    def test_prints_solved_board(self):
        out, _ = _run(["8", "--seed", "1", "--no-constrain-angle"])
        lines = out.splitlines()
        self.assertEqual(len(lines), 8)
        self.assertTrue(all(len(line) == 8 for line in lines))
        self.assertTrue(all(line.count("Q") == 1 for line in lines))
        self.assertTrue(is_valid_solution(_rows_from_render(lines)))

    def test_default_constraints(self):
        out, _ = _run(["10", "--seed", "2"])
        lines = out.splitlines()
        self.assertEqual(len(lines), 10)
        self.assertTrue(is_valid_solution(_rows_from_render(lines)))

    def test_verbose_reports_counters(self):
        out, _ = _run(["6", "--seed", "3", "--no-constrain-angle", "-v"])
        self.assertIn("iterations:", out)
        self.assertIn("retries:", out)
        self.assertIn("total steps:", out)

    def test_thread_pool(self):
        out, _ = _run(["8", "--seed", "4", "--no-constrain-angle", "--workers", "3"])
        self.assertTrue(is_valid_solution(_rows_from_render(out.splitlines())))

    def test_without_constraints_keeps_start(self):
        out, _ = _run(["3", "--no-constrain-attack", "--no-constrain-angle"])
        self.assertEqual(out, "QQQ\n___\n___\n")

    def test_single_queen_board(self):
        out, _ = _run(["1"])
        self.assertEqual(out, "Q\n")

    def test_unsatisfiable_selection_exits_with_one(self):
        for argv in (["3"], ["5", "--constrain-colinear"], ["8", "--max-points", "0"]):
            with self.assertRaises(SystemExit) as ctx:
                _run(argv)
            self.assertEqual(ctx.exception.code, 1, argv)

    def test_invalid_size(self):
        with self.assertRaises(SystemExit) as ctx:
            _run(["0"])
        self.assertEqual(ctx.exception.code, 1)

    def test_usage_error(self):
        with self.assertRaises(SystemExit) as ctx:
            _run(["abc"])
        self.assertEqual(ctx.exception.code, 2)


if __name__ == "__main__":
    unittest.main()
