# tests/test_evaluate.py

import csv
import os
import tempfile
import unittest

from backend.grid import Difficulty
from evaluation.evaluate import SUMMARY_FIELDS, evaluate_provider

SMALL = Difficulty("small", 5, 5, 3)


class TestEvaluate(unittest.TestCase):

    def test_evaluate_local_provider(self):
        stats = evaluate_provider("local", num_episodes=5, difficulty=SMALL, seed=0)
        self.assertEqual(stats["episodes"], 5)
        self.assertTrue(0.0 <= stats["win_rate"] <= 1.0)
        self.assertTrue(0.0 < stats["avg_score"] <= 1.0)
        self.assertGreaterEqual(stats["avg_moves"], 1.0)

    def test_evaluate_is_repeatable_with_seed(self):
        first = evaluate_provider("random", num_episodes=3, difficulty=SMALL, seed=9)
        second = evaluate_provider("random", num_episodes=3, difficulty=SMALL, seed=9)
        self.assertEqual(first, second)

    def test_summary_csv(self):
        with tempfile.TemporaryDirectory() as tmp:
            stats = evaluate_provider("local", num_episodes=2, difficulty=SMALL, seed=1, save_dir=tmp)
            self.assertTrue(os.path.exists(stats["summary_path"]))
            with open(stats["summary_path"], newline="") as f:
                rows = list(csv.DictReader(f))
            self.assertEqual(len(rows), 2)
            self.assertEqual(list(rows[0].keys()), SUMMARY_FIELDS)


if __name__ == "__main__":
    unittest.main()
