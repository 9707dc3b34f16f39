"""
Simulation runner for the trapping game.

Plays rounds with a scripted trapper and writes a JSON game log.
"""

import json
import time
import logging
from dataclasses import replace
from pathlib import Path
from datetime import datetime
from typing import Callable, Optional

from cairn import TurnController, ScoreTracker, load_config
from players import PLAYERS

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class TrapSimulation:
    """Main simulation orchestrator."""

    def __init__(
        self,
        config_path: Optional[str] = None,
        player: str = "route_blocker",
        log_dir: str = "logs",
        seed: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(exist_ok=True)

        if player not in PLAYERS:
            raise ValueError(f"Unknown player: {player} (choose from {', '.join(PLAYERS)})")

        # No animation in simulations: the hold elapses immediately
        config = load_config(config_path)
        config = replace(config, animation_hold=0.0, seed=seed if seed is not None else config.seed)

        logger.info("Initializing turn controller...")
        self.controller = TurnController(config, clock=clock)
        self.scores = ScoreTracker()
        self.controller.on_round_end = self.scores.record

        logger.info(f"Initializing {player} player...")
        self.player = PLAYERS[player].create_default(seed=config.seed)
        self.player_name = player

        # Game log
        self.game_log: list[dict] = []
        self.start_time: Optional[datetime] = None

    def run_round(self) -> dict:
        """Play the current round to completion."""
        board = self.controller.board
        max_turns = self.controller.topology.cell_count

        while not self.controller.state.is_terminal:
            if self.controller.time_up:
                logger.info(f"Session time up during round {board.round_number}")
                break
            if board.turn >= max_turns:
                logger.warning(f"Round {board.round_number} exceeded {max_turns} turns, abandoning")
                break

            cell = self.player.choose_cell(board)
            if cell is None:
                logger.warning(f"Round {board.round_number}: player has no cell to block")
                break

            result = self.controller.place_obstacle(cell)
            if not result.accepted:
                logger.error(f"Player chose an invalid cell {cell}: {result.reason.value}")
                break

        round_log = {
            "round": board.round_number,
            "outcome": self._round_outcome(),
            "placements": board.turn,
            "initial_obstacles": len(board.obstacles) - board.turn,
            "final_position": board.agent.position.to_dict(),
        }
        self._log_event("round_complete", round_log)
        return round_log

    def _round_outcome(self) -> str:
        state = self.controller.state
        if state.is_terminal:
            return state.value
        return "time_up" if self.controller.time_up else "abandoned"

    def run_game(self, rounds: int = 10) -> dict:
        """Run a series of rounds."""
        self.start_time = datetime.now()
        self._log_event("game_start", {
            "player": self.player_name,
            "rounds": rounds,
            "grid": f"{self.controller.topology.width}x{self.controller.topology.height}",
            "density": self.controller.config.obstacle_density,
        })

        for index in range(rounds):
            if self.controller.time_up:
                self._log_event("session_over", {"rounds_started": index})
                break
            if index > 0:
                self.controller.reset()
            self.run_round()

        results = self._compile_results()
        self._log_event("game_end", results)
        self._save_game_log()
        return results

    def _compile_results(self) -> dict:
        """Compile final game results."""
        return {
            **self.scores.get_summary(),
            "player": self.player_name,
            "duration": str(datetime.now() - self.start_time) if self.start_time else None,
        }

    def _log_event(self, event_type: str, data: dict):
        """Log a game event."""
        self.game_log.append({
            "timestamp": datetime.now().isoformat(),
            "event": event_type,
            "data": data,
        })

    def _save_game_log(self) -> Path:
        """Save game log to file."""
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_path = self.log_dir / f"game_{timestamp}.json"

        with open(log_path, "w") as f:
            json.dump(self.game_log, f, indent=2, default=str)

        logger.info(f"Game log saved to: {log_path}")
        return log_path


def main():
    """Run a trapping simulation."""
    import argparse

    parser = argparse.ArgumentParser(description="Hex trap simulation")
    parser.add_argument("--rounds", type=int, default=10, help="Rounds to play")
    parser.add_argument("--player", default="route_blocker", choices=sorted(PLAYERS),
                        help="Scripted player")
    parser.add_argument("--config", default=None, help="Config YAML path (default: data/config.yaml)")
    parser.add_argument("--logs", default="logs", help="Log directory path")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")

    args = parser.parse_args()

    sim = TrapSimulation(
        config_path=args.config,
        player=args.player,
        log_dir=args.logs,
        seed=args.seed,
    )

    results = sim.run_game(rounds=args.rounds)

    print("\n" + "="*60)
    print("FINAL RESULTS")
    print("="*60)
    print(f"Player: {results['player']}")
    print(f"Rounds: {results['rounds']}")
    print(f"Captured: {results['captured']}, Escaped: {results['escaped']}")
    print(f"Capture rate: {results['capture_rate']:.0%}")
    print(f"Avg placements to capture: {results['avg_placements_to_capture']}")
    print(f"Duration: {results['duration']}")


if __name__ == "__main__":
    main()
