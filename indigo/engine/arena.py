"""Bot-vs-Bot arena: run N Indigo games between strategies and report results."""

from __future__ import annotations

import logging
import statistics
import time
from dataclasses import dataclass, field
from typing import Callable

from indigo.engine.bot_strategy import BotStrategy
from indigo.engine.models import GameState, Player
from indigo.engine.session import GameSession
from indigo.game.scoring import check_conservation, score, winners
from indigo.game.types import Color

logger = logging.getLogger(__name__)

SEAT_COLORS = [Color.RED, Color.BLUE, Color.WHITE, Color.PURPLE]

# 54 placements fill the board; anything longer means the game is stuck.
MAX_TURNS = 200


@dataclass
class ArenaResult:
    """Per-strategy tallies of an arena run.

    ``points`` holds one entry per game for every strategy label; the other
    lists hold one entry per game.
    """

    num_games: int
    wins: dict[str, int] = field(default_factory=dict)
    draws: int = 0
    points: dict[str, list[int]] = field(default_factory=dict)
    gems_lost: list[int] = field(default_factory=list)
    turns: list[int] = field(default_factory=list)
    game_durations_ms: list[float] = field(default_factory=list)

    def record(
        self,
        state: GameState,
        labels: dict[Color, str],
        turns: int,
        elapsed_ms: float,
    ) -> None:
        """Add one finished game, seen through the seat labels it was played with."""
        for color, label in labels.items():
            self.points.setdefault(label, []).append(score(state, color))
            self.wins.setdefault(label, 0)

        best = winners(state)
        if len(best) == 1:
            label = labels[best[0]]
            self.wins[label] = self.wins.get(label, 0) + 1
        else:
            self.draws += 1

        self.gems_lost.append(len(state.gem_pool))
        self.turns.append(turns)
        self.game_durations_ms.append(elapsed_ms)

    def win_rate(self, name: str) -> float:
        return self.wins.get(name, 0) / max(self.num_games, 1)

    def mean_points(self, name: str) -> float:
        return statistics.fmean(self.points[name]) if self.points.get(name) else 0.0

    def summary(self) -> str:
        lines = [f"Indigo arena: {self.num_games} games"]
        for name in self.points:
            lines.append(
                f"  {name:>12s}  wins {self.wins.get(name, 0):3d} ({self.win_rate(name):5.1%})"
                f"  mean points {self.mean_points(name):4.1f}"
                f"  best {max(self.points[name], default=0):2d}"
            )
        lines.append(f"  {'draws':>12s}  {self.draws}")
        if self.turns:
            lines.append(
                f"  per game: {statistics.fmean(self.turns):.1f} turns,"
                f" {statistics.fmean(self.gems_lost):.1f} gems lost,"
                f" {statistics.fmean(self.game_durations_ms):.0f}ms"
            )
        return "\n".join(lines)


def run_arena(
    strategies: dict[str, BotStrategy],
    num_games: int = 20,
    base_seed: int = 0,
    num_players: int = 2,
    shared_gates: bool = False,
    alternate_seats: bool = True,
    check_invariants: bool = True,
    progress_callback: Callable[[int, int], None] | None = None,
) -> ArenaResult:
    """Play *num_games* games between *strategies*, one strategy per seat.

    Game *i* shuffles its draw stack with ``base_seed + i``. With
    *alternate_seats* the seat order shifts by one every game, so each
    strategy opens equally often. *check_invariants* verifies that no gem
    appears or vanishes after every placement.
    """
    labels = list(strategies)
    if len(labels) != num_players:
        raise ValueError(f"Need exactly {num_players} strategies, got {len(labels)}")

    result = ArenaResult(num_games=num_games)
    for game_idx in range(num_games):
        shift = game_idx if alternate_seats else 0
        seats = {
            SEAT_COLORS[i]: labels[(i + shift) % num_players] for i in range(num_players)
        }
        players = [Player(name=label, color=color, is_ai=True) for color, label in seats.items()]

        started = time.monotonic()
        session = GameSession()
        session.start_game(players, shared_gates=shared_gates, seed=base_seed + game_idx)
        turns = _play_one_game(
            session,
            {color: strategies[label] for color, label in seats.items()},
            check_invariants,
        )
        result.record(session.state, seats, turns, (time.monotonic() - started) * 1000)
        logger.debug("Arena game %d finished after %d turns", game_idx + 1, turns)

        if progress_callback:
            progress_callback(game_idx + 1, num_games)

    return result


def _play_one_game(
    session: GameSession,
    seat_strategies: dict[Color, BotStrategy],
    check_invariants: bool,
) -> int:
    """Play until the game is over and return the number of placements."""
    turns = 0
    while turns < MAX_TURNS and not session.is_game_over():
        player = session.state.player_at_turn
        move = seat_strategies[player.color].choose_move(session.state)
        session.set_held_rotation(move.rotation)
        session.place_tile(move.position).unwrap()
        turns += 1
        if check_invariants:
            check_conservation(session.state)
    return turns
