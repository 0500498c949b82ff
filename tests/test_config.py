# tests/test_config.py

import os
import tempfile
import unittest

from backend.board import board_from_layout, reveal_cell, toggle_flag
from backend.config import UnknownDifficulty, get_difficulty, list_difficulties, load_config
from backend.errors import InvalidMineCount
from backend.utils import deserialize_board, format_board, serialize_board, visible_board


class TestConfig(unittest.TestCase):

    def test_bundled_presets(self):
        config = load_config()
        beginner = get_difficulty("beginner", config)
        self.assertEqual((beginner.rows, beginner.cols, beginner.mine_count), (9, 9, 10))
        expert = get_difficulty("expert", config)
        self.assertEqual((expert.rows, expert.cols, expert.mine_count), (16, 30, 99))
        self.assertEqual(get_difficulty(config=config).name, config["default_difficulty"])
        self.assertEqual(len(list_difficulties(config)), 3)

    def test_unknown_difficulty(self):
        with self.assertRaises(UnknownDifficulty):
            get_difficulty("impossible")

    def test_custom_config_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "config.yaml")
            with open(path, "w") as f:
                f.write(
                    "difficulties:\n"
                    "  tiny:\n"
                    "    rows: 4\n"
                    "    cols: 4\n"
                    "    mine_count: 2\n"
                    "  broken:\n"
                    "    rows: 3\n"
                    "    cols: 3\n"
                    "    mine_count: 1\n"
                    "default_difficulty: tiny\n"
                )
            config = load_config(path)
            self.assertEqual(get_difficulty(config=config).mine_count, 2)
            with self.assertRaises(InvalidMineCount):
                get_difficulty("broken", config)


class TestBoardSerialization(unittest.TestCase):

    def setUp(self):
        board = board_from_layout(["*..", "...", "..."])
        board = toggle_flag(board, 0, 0)
        self.board, _ = reveal_cell(board, 2, 2)

    def test_serialize_round_trip(self):
        data = serialize_board(self.board)
        self.assertEqual(data[0][0]["state"], "flagged")
        self.assertTrue(data[0][0]["is_mine"])
        self.assertEqual(deserialize_board(data), self.board)

    def test_visible_board_hides_mines(self):
        visible = visible_board(self.board)
        self.assertEqual(visible[0][0], "F")
        self.assertEqual(visible[1][1], 1)
        self.assertEqual(visible[2][2], 0)

    def test_format_board(self):
        self.assertEqual(format_board(self.board).splitlines()[0], " F  1  0 ")
        self.assertEqual(format_board(self.board, reveal_all=True).splitlines()[0], " *  1  0 ")


if __name__ == "__main__":
    unittest.main()
