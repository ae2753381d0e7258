from __future__ import annotations

import os
import random
import sys
import unittest
from contextlib import contextmanager
from pathlib import Path


BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))


from checkers.board import Board  # noqa: E402
from checkers.game import TurnState  # noqa: E402
from checkers.pieces import Color, Piece  # noqa: E402
from server import STARTING_SIDE_ENV  # noqa: E402
from server.app import create_app  # noqa: E402
from server.schemas import (  # noqa: E402
    CoordinateModel,
    MoveRequest,
    PlayerNamesRequest,
    ResetRequest,
    SelectRequest,
    StartingSideRequest,
)
from server.session import GameSession  # noqa: E402


def _square(row: int, col: int) -> CoordinateModel:
    return CoordinateModel(row=row, col=col)


@contextmanager
def _patch_env(name: str, value: str):
    old = os.environ.get(name)
    os.environ[name] = value
    try:
        yield
    finally:
        if old is None:
            os.environ.pop(name, None)
        else:
            os.environ[name] = old


def _one_move_from_red_win(session: GameSession) -> None:
    board = Board.empty()
    board.setPiece((5, 2), Piece(Color.RED))
    board.setPiece((4, 3), Piece(Color.BLACK))
    session.game.board = board
    session.game.turn = TurnState(side_to_move=Color.RED)
    session.game.winner = None


class SessionMoveTests(unittest.TestCase):
    def setUp(self) -> None:
        self.session = GameSession(rng=random.Random(3))

    def test_initial_state_serialization(self) -> None:
        state = self.session.serialize()
        self.assertEqual(state["turn"], "red")
        self.assertFalse(state["gameOver"])
        self.assertIsNone(state["winner"])
        self.assertEqual(len(state["pieces"]), 24)
        self.assertEqual(state["pieceCounts"]["red"], {"total": 12, "kings": 0})
        self.assertFalse(state["mandatoryCapture"])
        self.assertEqual(state["legalMoves"], [])

    def test_move_with_start_selects_and_moves(self) -> None:
        state = self.session.make_move(MoveRequest(start=_square(5, 1), destination=_square(4, 0)))
        self.assertEqual(state["turn"], "black")
        self.assertEqual(state["moveCount"], 1)
        self.assertTrue(state["outcome"]["turnEnded"])
        self.assertFalse(state["outcome"]["captured"])
        self.assertEqual(state["outcome"]["move"]["end"], {"row": 4, "col": 0})

    def test_select_then_move(self) -> None:
        state = self.session.select_piece(SelectRequest(square=_square(5, 3)))
        self.assertEqual(state["selected"], {"row": 5, "col": 3})
        self.assertEqual(len(state["legalMoves"]), 2)
        state = self.session.make_move(MoveRequest(destination=_square(4, 4)))
        self.assertIsNone(state["selected"])

    def test_rejections_raise_runtime_error(self) -> None:
        with self.assertRaises(RuntimeError):
            self.session.select_piece(SelectRequest(square=_square(2, 2)))
        with self.assertRaises(RuntimeError):
            self.session.make_move(MoveRequest(destination=_square(4, 0)))
        with self.assertRaises(RuntimeError):
            self.session.make_move(MoveRequest(start=_square(5, 1), destination=_square(3, 3)))
        state = self.session.serialize()
        self.assertEqual(state["moveCount"], 0)
        self.assertIsNone(state["selected"])

    def test_rejected_move_keeps_previous_selection(self) -> None:
        self.session.select_piece(SelectRequest(square=_square(5, 3)))
        before = self.session.serialize()
        with self.assertRaises(RuntimeError):
            self.session.make_move(MoveRequest(start=_square(5, 1), destination=_square(3, 3)))
        after = self.session.serialize()
        self.assertEqual(after["selected"], {"row": 5, "col": 3})
        self.assertEqual(after["pieces"], before["pieces"])
        self.assertEqual(after["turn"], "red")

    def test_legal_moves_query(self) -> None:
        result = self.session.get_legal_moves(5, 5)
        ends = [move["end"] for move in result["moves"]]
        self.assertEqual(ends, [{"row": 4, "col": 4}, {"row": 4, "col": 6}])
        with self.assertRaises(ValueError):
            self.session.get_legal_moves(4, 4)

    def test_win_is_recorded_on_scoreboard(self) -> None:
        _one_move_from_red_win(self.session)
        state = self.session.make_move(MoveRequest(start=_square(5, 2), destination=_square(3, 4)))
        self.assertTrue(state["gameOver"])
        self.assertEqual(state["winner"], "red")
        self.assertEqual(state["outcome"]["winner"], "red")
        stats = self.session.stats()
        self.assertEqual(stats["red"]["wins"], 1)
        self.assertEqual(stats["black"]["losses"], 1)
        with self.assertRaises(RuntimeError):
            self.session.record_draw()


class SessionHostFeatureTests(unittest.TestCase):
    def setUp(self) -> None:
        self.session = GameSession(rng=random.Random(11))

    def test_hint_selects_a_movable_piece(self) -> None:
        state = self.session.hint()
        hint = (state["hint"]["row"], state["hint"]["col"])
        self.assertIn(hint, [(5, 1), (5, 3), (5, 5), (5, 7)])
        self.assertEqual(state["selected"], state["hint"])
        self.assertTrue(state["legalMoves"])

    def test_hint_after_game_over_fails(self) -> None:
        _one_move_from_red_win(self.session)
        self.session.make_move(MoveRequest(start=_square(5, 2), destination=_square(3, 4)))
        with self.assertRaises(RuntimeError):
            self.session.hint()

    def test_player_names_fall_back_to_defaults(self) -> None:
        stats = self.session.set_player_names(PlayerNamesRequest(red="Ana", black="   "))
        self.assertEqual(stats["red"]["name"], "Ana")
        self.assertEqual(stats["black"]["name"], "Black Player")

    def test_draw_counts_for_both_and_resets(self) -> None:
        self.session.make_move(MoveRequest(start=_square(5, 1), destination=_square(4, 0)))
        state = self.session.record_draw()
        self.assertEqual(state["moveCount"], 0)
        self.assertEqual(state["players"]["red"]["draws"], 1)
        self.assertEqual(state["players"]["black"]["draws"], 1)
        stats = self.session.reset_stats()
        self.assertEqual(stats["red"]["draws"], 0)

    def test_starting_side_and_reset(self) -> None:
        state = self.session.set_starting_side(StartingSideRequest(startingSide="black"))
        self.assertEqual(state["turn"], "black")
        self.session.make_move(MoveRequest(start=_square(2, 0), destination=_square(3, 1)))
        with self.assertRaises(RuntimeError):
            self.session.set_starting_side(StartingSideRequest(startingSide="red"))

        state = self.session.reset()
        self.assertEqual(state["turn"], "black")
        state = self.session.reset(ResetRequest(startingSide="red"))
        self.assertEqual(state["turn"], "red")
        self.assertEqual(state["startingSide"], "red")


class AppFactoryTests(unittest.TestCase):
    def test_starting_side_from_environment(self) -> None:
        with _patch_env(STARTING_SIDE_ENV, "black"):
            app = create_app()
        self.assertEqual(app.state.session.game.current_player, Color.BLACK)
        paths = {route.path for route in app.routes}
        self.assertIn("/move", paths)
        self.assertIn("/hint", paths)
        self.assertIn("/stats/reset", paths)

    def test_unknown_starting_side_is_rejected(self) -> None:
        with _patch_env(STARTING_SIDE_ENV, "green"):
            with self.assertRaises(ValueError):
                create_app()


if __name__ == "__main__":
    unittest.main()
