"""Tests for the AI service bound to a game session."""

from __future__ import annotations

import pytest

from indigo.engine.ai_service import AIService
from indigo.engine.errors import GameNotStartedError
from indigo.engine.models import GameState, Player
from indigo.engine.session import GameSession
from indigo.game.types import Color, Gem, RouteTile, TileType
from tests.conftest import make_players, pos


@pytest.fixture
def ai(session: GameSession) -> AIService:
    return AIService(session, seed=7)


class TestPlayRandomly:
    def test_move_is_legal_and_not_committed(self, ai: AIService) -> None:
        move = ai.play_randomly()
        assert ai.session.check_placement(move.position)
        assert move.position not in ai.session.state.board

    def test_held_tile_turned_to_move_rotation(self, ai: AIService) -> None:
        move = ai.play_randomly()
        assert ai.session.state.player_at_turn.held_tile.rotation == move.rotation

    def test_after_some_placements(self, ai: AIService) -> None:
        ai.session.place_tile(pos(1, -1)).unwrap()
        ai.session.place_tile(pos(-1, 4)).unwrap()
        move = ai.play_randomly()
        assert ai.session.check_placement(move.position)
        assert move.position not in (pos(1, -1), pos(-1, 4))

    def test_committing_the_move(self, ai: AIService) -> None:
        move = ai.play_randomly()
        state = ai.session.place_tile(move.position).unwrap()
        assert state.board[move.position].rotation == move.rotation


class TestPlaySmart:
    def test_smart_move_captures(self) -> None:
        session = GameSession()
        session.start_game(make_players(TileType.TILE3, TileType.TILE1), seed=0)
        ai = AIService(session)
        move = ai.play_smart()
        session.place_tile(move.position).unwrap()
        assert session.scores()[Color.RED] == 1

    def test_choose_move_uses_player_policy(self) -> None:
        session = GameSession()
        session.start_game(
            make_players(TileType.TILE3, TileType.TILE1, is_ai=True, smart_ai=True), seed=0,
        )
        ai = AIService(session, seed=1)
        assert ai.choose_move() == AIService(session).play_smart()

    def test_choose_move_for_human_is_random(self, ai: AIService) -> None:
        move = ai.choose_move()
        assert ai.session.check_placement(move.position)


class TestStateBridge:
    def test_set_and_get_round_trip(self, ai: AIService) -> None:
        state = GameState(
            board={},
            draw_stack=[RouteTile(tile_type=TileType.TILE0)],
            players=[
                Player(name="one", color=Color.BLUE, held_tile=RouteTile(tile_type=TileType.TILE4)),
            ],
            gem_pool=[Gem.AMBER, Gem.EMERALD, Gem.EMERALD],
        )
        ai.set_current_state(state)
        assert ai.get_current_state() == state

    def test_get_returns_a_copy(self, ai: AIService) -> None:
        copy = ai.get_current_state()
        copy.board.clear()
        copy.players.pop()
        assert ai.session.state.board
        assert len(ai.session.state.players) == 2

    def test_set_stores_a_copy(self, ai: AIService) -> None:
        state = ai.get_current_state()
        ai.set_current_state(state)
        state.gem_pool.append(Gem.SAPPHIRE)
        assert ai.session.state.gem_pool == []

    def test_without_game(self) -> None:
        with pytest.raises(GameNotStartedError):
            AIService(GameSession()).get_current_state()


class TestMoveGeneration:
    def test_valid_positions(self, ai: AIService) -> None:
        positions = ai.find_all_valid_positions()
        assert len(positions) == 54
        ai.session.place_tile(pos(1, -1))
        assert pos(1, -1) not in ai.find_all_valid_positions()

    def test_rotations(self, ai: AIService) -> None:
        tile = ai.session.state.player_at_turn.held_tile
        assert len(ai.get_all_tile_possible_rotations(tile)) == 6

    def test_next_states(self, ai: AIService) -> None:
        states = ai.get_all_possible_next_states()
        assert len(states) == 54 * 6
        assert all(len(s.board) == len(ai.session.state.board) + 1 for s in states)
