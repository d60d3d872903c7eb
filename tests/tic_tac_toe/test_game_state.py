"""
Unit tests for the Tic-Tac-Toe game session (history + cursor).
"""
import random
import unittest

from app.projects.tic_tac_toe.core.game_state import (
    GameSession,
    IllegalMove,
    OutOfRange,
    Snapshot,
)

DRAW_SEQUENCE = [0, 1, 2, 4, 3, 5, 7, 6, 8]


def _play(*indexes):
    game = GameSession()
    for index in indexes:
        game.apply_move(index)
    return game


class TestInitialState(unittest.TestCase):

    def test_starts_with_single_empty_snapshot(self):
        game = GameSession()
        self.assertEqual(len(game.history), 1)
        self.assertEqual(game.cursor, 0)
        self.assertEqual(game.current_snapshot(), Snapshot.initial())
        self.assertIsNone(game.current_snapshot().location)
        self.assertEqual(game.current_player, "X")
        self.assertEqual(game.status.text, "Next player:X")


class TestApplyMove(unittest.TestCase):

    def test_first_move_places_x(self):
        game = _play(0)
        snapshot = game.current_snapshot()
        self.assertEqual(snapshot.board[0], "X")
        self.assertEqual(snapshot.location, (1, 1))
        self.assertEqual(game.cursor, 1)
        self.assertEqual(game.status.text, "Next player:O")

    def test_location_is_one_based_row_col(self):
        game = _play(0, 5)
        self.assertEqual(game.current_snapshot().location, (2, 3))

    def test_top_row_win_scenario(self):
        game = _play(0, 4, 1, 3)
        self.assertEqual(game.current_snapshot().board[4], "O")
        self.assertEqual(game.current_snapshot().board[3], "O")
        game.apply_move(2)
        self.assertEqual(game.status.text, "Winner:X")
        self.assertEqual(game.winner.line, (0, 1, 2))

        before = game.to_dict()
        with self.assertRaises(IllegalMove):
            game.apply_move(8)
        self.assertEqual(game.to_dict(), before)

    def test_occupied_cell_is_illegal(self):
        game = _play(4)
        with self.assertRaises(IllegalMove):
            game.apply_move(4)
        self.assertEqual(len(game.history), 2)
        self.assertEqual(game.cursor, 1)

    def test_out_of_board_index_is_illegal(self):
        game = GameSession()
        for index in (-1, 9, 100):
            with self.assertRaises(IllegalMove):
                game.apply_move(index)
        self.assertEqual(len(game.history), 1)

    def test_non_integer_index_is_illegal(self):
        game = GameSession()
        for index in ("3", 1.0, None, True):
            with self.assertRaises(IllegalMove):
                game.apply_move(index)

    def test_draw_scenario(self):
        game = _play(*DRAW_SEQUENCE)
        self.assertEqual(game.status.text, "It's a draw!")
        self.assertIsNone(game.winner)
        self.assertEqual(len(game.history), 10)

    def test_snapshots_differ_in_exactly_one_cell(self):
        rng = random.Random(1234)
        for _ in range(200):
            game = GameSession()
            while game.status.kind == "next":
                empty = [i for i, cell in enumerate(game.current_snapshot().board) if cell is None]
                game.apply_move(rng.choice(empty))
            for i in range(1, len(game.history)):
                prev, cur = game.history[i - 1].board, game.history[i].board
                changed = [j for j in range(9) if prev[j] != cur[j]]
                self.assertEqual(len(changed), 1)
                self.assertIsNone(prev[changed[0]])
                self.assertEqual(cur[changed[0]], "X" if (i - 1) % 2 == 0 else "O")


class TestJump(unittest.TestCase):

    def test_jump_returns_unmutated_snapshot(self):
        game = _play(0, 4, 1, 3, 2)
        history = list(game.history)
        game.jump(2)
        self.assertEqual(game.cursor, 2)
        self.assertIs(game.current_snapshot(), history[2])
        self.assertEqual(game.history, history)
        self.assertEqual(game.current_player, "X")

    def test_jump_out_of_range(self):
        game = _play(0, 4)
        for move in (-1, 3, 50):
            with self.assertRaises(OutOfRange):
                game.jump(move)
        self.assertEqual(game.cursor, 2)

    def test_move_after_jump_discards_future(self):
        game = _play(0, 4, 1, 3, 2)
        self.assertEqual(len(game.history), 6)
        game.jump(2)
        game.apply_move(7)
        self.assertEqual(len(game.history), 4)
        self.assertEqual(game.cursor, 3)
        self.assertEqual(game.current_snapshot().board[7], "X")
        self.assertEqual(game.current_snapshot().location, (3, 2))

    def test_can_play_again_after_jumping_back_from_a_win(self):
        game = _play(0, 4, 1, 3, 2)
        game.jump(4)
        game.apply_move(8)
        self.assertEqual(len(game.history), 6)
        self.assertIsNone(game.winner)

    def test_jump_to_start(self):
        game = _play(0, 4)
        game.jump(0)
        self.assertEqual(game.current_snapshot(), Snapshot.initial())
        self.assertEqual(game.status.text, "Next player:X")


class TestMoveList(unittest.TestCase):

    def test_descriptions_and_current_marker(self):
        game = _play(0, 4)
        game.jump(1)
        entries = game.moves()
        self.assertEqual(
            [e.description for e in entries],
            ["Go to game start", "Go to move #1", "Go to move #2"],
        )
        self.assertEqual([e.is_current for e in entries], [False, True, False])
        self.assertEqual(entries[2].location, (2, 2))

    def test_toggle_order_only_changes_display(self):
        game = _play(0, 4, 8)
        game.jump(1)
        history = list(game.history)
        game.toggle_order()
        self.assertFalse(game.ascending)
        self.assertEqual([e.move for e in game.ordered_moves()], [3, 2, 1, 0])
        self.assertEqual(game.history, history)
        self.assertEqual(game.cursor, 1)
        game.toggle_order()
        self.assertEqual([e.move for e in game.ordered_moves()], [0, 1, 2, 3])


class TestSessionStorage(unittest.TestCase):

    def test_from_dict_restores_session(self):
        game = _play(0, 4, 1)
        game.jump(2)
        game.toggle_order()
        restored = GameSession.from_dict(game.to_dict())
        self.assertEqual(restored, game)

    def test_rejects_non_empty_first_snapshot(self):
        data = GameSession().to_dict()
        data["history"][0]["squares"][0] = "X"
        with self.assertRaises(ValueError):
            GameSession.from_dict(data)

    def test_rejects_two_cell_change(self):
        data = _play(0).to_dict()
        data["history"][1]["squares"][8] = "O"
        with self.assertRaises(ValueError):
            GameSession.from_dict(data)

    def test_rejects_wrong_mover(self):
        data = _play(0).to_dict()
        data["history"][1]["squares"][0] = "O"
        with self.assertRaises(ValueError):
            GameSession.from_dict(data)

    def test_rejects_location_mismatch(self):
        data = _play(0).to_dict()
        data["history"][1]["location"] = [3, 3]
        with self.assertRaises(ValueError):
            GameSession.from_dict(data)

    def test_rejects_move_after_win(self):
        data = _play(0, 4, 1, 3, 2).to_dict()
        board = list(data["history"][-1]["squares"])
        board[8] = "O"
        data["history"].append({"squares": board, "location": [3, 3]})
        with self.assertRaises(ValueError):
            GameSession.from_dict(data)

    def test_rejects_bad_cursor_and_shapes(self):
        data = _play(0).to_dict()
        data["cursor"] = 5
        with self.assertRaises(ValueError):
            GameSession.from_dict(data)
        for bad in (None, [], {"history": []}, {"history": "x"}, {"history": [{"squares": [None] * 8}]}):
            with self.assertRaises(ValueError):
                GameSession.from_dict(bad)
