"""One-command entrypoint.

    python play.py serve                 # run the Socket.IO server
    python play.py simulate --seed 7     # headless autoplay game, prints the result

Press Ctrl+C to stop the server.
"""
from __future__ import annotations

import argparse
import logging
import sys

from snakegame import (
    AStarSearch,
    BreadthFirstSearch,
    ConfigurationError,
    GameConfig,
    Pathfinder,
    Snapshot,
    create_game,
)

SEARCHES = {
    "astar": AStarSearch,
    "bfs": BreadthFirstSearch,
}


def draw(snapshot: Snapshot) -> str:
    """Text rendering of a snapshot: H head, o body, * food."""
    size = snapshot.grid_size
    rows = [["." for _ in range(size)] for _ in range(size)]
    if snapshot.food is not None:
        fx, fy = snapshot.food
        rows[fy][fx] = "*"
    for x, y in snapshot.body[1:]:
        rows[y][x] = "o"
    hx, hy = snapshot.head
    rows[hy][hx] = "H"
    return "\n".join(" ".join(row) for row in rows)


def simulate(config: GameConfig, search: str, max_ticks: int, show: bool) -> Snapshot:
    game = create_game(config, pathfinder=Pathfinder(search=SEARCHES[search]()))
    game.set_autoplay(True)
    snapshot = game.snapshot()
    for _ in range(max_ticks):
        snapshot = game.step()
        if show:
            print(draw(snapshot), end="\n\n")
        if snapshot.game_over:
            break
    return snapshot


def main(argv=None):
    parser = argparse.ArgumentParser(description="Grid snake with A* autoplay")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the Socket.IO game server")
    serve.add_argument("--host", default=None, help="Host interface (default $SNAKE_HOST or 127.0.0.1)")
    serve.add_argument("--port", type=int, default=None, help="Port (default $SNAKE_PORT or 5000)")

    sim = sub.add_parser("simulate", help="Play one headless autoplay game")
    sim.add_argument("--board-size", type=float, default=400, help="Board size in px")
    sim.add_argument("--block-size", type=float, default=20, help="Block size in px")
    sim.add_argument("--seed", type=int, default=None, help="Random seed for food placement")
    sim.add_argument("--search", choices=sorted(SEARCHES), default="astar", help="Graph search algorithm")
    sim.add_argument("--max-ticks", type=int, default=10000, help="Stop after this many ticks")
    sim.add_argument("--show", action="store_true", help="Print the board after every tick")

    args = parser.parse_args(argv)

    if args.command == "serve":
        from server import app as server_app
        if args.verbose:
            logging.getLogger().setLevel(logging.DEBUG)
        server_app.run(host=args.host or server_app.HOST, port=args.port or server_app.PORT)
        return 0

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    try:
        config = GameConfig(board_size=args.board_size, block_size=args.block_size,
                            autoplay=True, seed=args.seed)
    except ConfigurationError as e:
        print(f"[play] {e}", file=sys.stderr)
        return 2

    snapshot = simulate(config, args.search, args.max_ticks, args.show)
    print(draw(snapshot))
    print(f"[play] state={snapshot.state.value} score={snapshot.score} length={len(snapshot.body)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
