# evaluation/evaluate.py

import argparse
import csv
import logging
import os
import time
from typing import Dict, List

import numpy as np

from backend.config import get_difficulty, load_config
from backend.game import GameSession
from backend.grid import CellState, Difficulty
from models import PROVIDER_REGISTRY, get_provider

logger = logging.getLogger(__name__)

SUMMARY_FIELDS = ["episode", "moves", "won", "score", "hints", "mean_confidence", "certain_hints"]


def play_episode(session: GameSession) -> Dict:
    """
    Play one game by following the session's provider until the game ends.
    The opening click goes to the board center.
    """
    difficulty = session.difficulty
    session.reveal(difficulty.rows // 2, difficulty.cols // 2)

    confidences: List[float] = []
    while not session.is_game_over():
        hint = session.request_hint()
        if hint is None:
            break
        confidences.append(hint.confidence)
        session.reveal(hint.row, hint.col)

    revealed = sum(1 for cell in session.board if cell.state == CellState.REVEALED and not cell.is_mine)
    conf = np.asarray(confidences, dtype=float)
    return {
        "moves": session.moves_made,
        "won": session.is_win(),
        "score": revealed / difficulty.safe_cells,
        "hints": len(confidences),
        "mean_confidence": float(conf.mean()) if conf.size else 0.0,
        "certain_hints": int(np.count_nonzero(conf >= 1.0)),
    }


def evaluate_provider(
    provider_name: str,
    num_episodes: int,
    difficulty: Difficulty,
    seed: int = None,
    verbose: bool = False,
    save_dir: str = None
) -> Dict:
    """
    Autoplay num_episodes games with the named provider and return aggregate
    statistics. Optionally write a per-episode CSV summary to save_dir.
    """
    if save_dir:
        os.makedirs(save_dir, exist_ok=True)

    summary = []
    for ep in range(1, num_episodes + 1):
        episode_seed = None if seed is None else seed + ep
        provider = get_provider(provider_name, config={"seed": episode_seed})
        session = GameSession(difficulty, seed=episode_seed, provider=provider)

        result = play_episode(session)
        result["episode"] = ep
        summary.append(result)

        if verbose:
            print(f"Episode {ep}: {'WIN' if result['won'] else 'loss'} in {result['moves']} moves "
                  f"(score: {result['score']:.2f})")

    wins = np.array([row["won"] for row in summary], dtype=bool)
    moves = np.array([row["moves"] for row in summary], dtype=float)
    scores = np.array([row["score"] for row in summary], dtype=float)

    stats = {
        "provider": provider_name,
        "difficulty": difficulty.name,
        "episodes": num_episodes,
        "win_rate": float(wins.mean()) if wins.size else 0.0,
        "avg_moves": float(moves.mean()) if moves.size else 0.0,
        "avg_score": float(scores.mean()) if scores.size else 0.0,
    }

    print(f"\n{provider_name} on {difficulty.name} - Win rate: {stats['win_rate']:.2%}, "
          f"Avg moves: {stats['avg_moves']:.1f}")

    if save_dir:
        timestamp = int(time.time())
        path = os.path.join(save_dir, f"summary_{provider_name}_{difficulty.name}_{timestamp}.csv")
        with open(path, "w", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=SUMMARY_FIELDS)
            writer.writeheader()
            writer.writerows(summary)
        logger.info("Wrote episode summary to %s", path)
        stats["summary_path"] = path

    return stats


def main():
    p = argparse.ArgumentParser(description="Autoplay games with a hint provider and report win rates.")
    p.add_argument("--config", default=None, help="path to a YAML config file")
    p.add_argument("--provider", default="local", choices=sorted(PROVIDER_REGISTRY))
    p.add_argument("--difficulty", default=None, help="difficulty preset name from the config")
    p.add_argument("--episodes", type=int, default=50)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--save-dir", default=None, help="directory for the CSV episode summary")
    p.add_argument("--verbose", action="store_true")
    args = p.parse_args()

    logging.basicConfig(level=logging.INFO)

    config = load_config(args.config)
    difficulty = get_difficulty(args.difficulty, config)
    evaluate_provider(
        provider_name=args.provider,
        num_episodes=args.episodes,
        difficulty=difficulty,
        seed=args.seed,
        verbose=args.verbose,
        save_dir=args.save_dir,
    )


if __name__ == "__main__":
    main()
