"""Command-line entry point for the Q-learning grid world."""

import argparse
import sys
import time
from typing import List, Optional

from .domain.types import TrainingConfig, QGridError, MAX_GRID_SIZE, ACTION_NAMES
from .domain.value_table import ValueTable
from .domain.qlearning import QLearningAgent
from .ui.render import render_grid, render_policy
from .utils.rng import SeededRNG
from .utils.grid_factory import create_default_config, create_environment
from .utils.maze_analysis import shortest_path_length
from .utils.maze_serialization import load_maze, save_maze, maze_from_config
from .utils.table_storage import load_value_table_for, save_value_table


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="qgrid",
        description="Q-learning Grid World"
    )
    parser.add_argument("--train", type=int, default=0, metavar="N", help="Train for N episodes")
    parser.add_argument("--play", type=int, default=0, metavar="N", help="Play greedy policy for N episodes")
    parser.add_argument("--render", action="store_true", help="Render grid during play")
    parser.add_argument("--render-every", type=int, default=0, metavar="N",
                        help="Render training every N episodes")
    parser.add_argument("--show-policy", action="store_true", help="Print the greedy policy as arrows")
    parser.add_argument("--save", type=str, metavar="PATH", help="Save Q-table to PATH")
    parser.add_argument("--load", type=str, metavar="PATH", help="Load Q-table from PATH")
    parser.add_argument("--maze", type=str, metavar="PATH", help="Load walls, start and goal from a JSON maze file")
    parser.add_argument("--export-maze", type=str, metavar="PATH", help="Write the active maze to a JSON file")
    parser.add_argument("--size", type=int, nargs=2, default=None, metavar=("W", "H"),
                        help=f"Grid size (<= {MAX_GRID_SIZE} x {MAX_GRID_SIZE}, default 5 5)")
    parser.add_argument("--alpha", type=float, default=0.1, help="Learning rate (default 0.1)")
    parser.add_argument("--gamma", type=float, default=0.99, help="Discount (default 0.99)")
    parser.add_argument("--eps-start", type=float, default=1.0, help="Epsilon start (default 1.0)")
    parser.add_argument("--eps-min", type=float, default=0.05, help="Epsilon min (default 0.05)")
    parser.add_argument("--eps-decay", type=float, default=0.0025, help="Epsilon decay (default 0.0025)")
    parser.add_argument("--step-reward", type=float, default=-1.0, help="Reward per step (default -1)")
    parser.add_argument("--goal-reward", type=float, default=10.0, help="Reward at the goal (default 10)")
    parser.add_argument("--report-every", type=int, default=100, metavar="N",
                        help="Print training averages every N episodes")
    parser.add_argument("--seed", type=int, default=None, help="RNG seed, wrapped to 32 bits (default: current time)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        if args.maze:
            if args.size is not None:
                print("⚠️  --size is ignored when --maze is given", file=sys.stderr)
            maze = load_maze(args.maze)
            config = maze.to_env_config(args.step_reward, args.goal_reward)
            print(f"Loaded maze '{maze.name}' {config.width}x{config.height} from {args.maze}")
        else:
            width, height = args.size or (5, 5)
            config = create_default_config(width, height, args.step_reward, args.goal_reward)
    except QGridError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    env = create_environment(config)
    # seeds behave like the unsigned 32-bit seeds of srand()
    seed = args.seed if args.seed is not None else int(time.time())
    rng = SeededRNG(seed & 0xFFFFFFFF)

    if args.load:
        try:
            table = load_value_table_for(args.load, env.width, env.height)
        except QGridError as e:
            print(f"❌ {e}", file=sys.stderr)
            return 1
        print(f"Loaded Q-table {table.width}x{table.height} from {args.load}")
    else:
        table = ValueTable.zeros(env.width, env.height)

    if args.export_maze:
        save_maze(maze_from_config(config), args.export_maze)
        print(f"Saved maze to {args.export_maze}")

    training_config = TrainingConfig(
        learning_rate=args.alpha,
        discount_factor=args.gamma,
        epsilon_start=args.eps_start,
        epsilon_min=args.eps_min,
        epsilon_decay=args.eps_decay,
        report_interval=args.report_every
    )
    agent = QLearningAgent(env, table, training_config, rng)

    if args.train > 0:
        def render_training_step(episode, epsilon, pos):
            print(f"\n[Episode {episode} | eps={epsilon:.3f}]")
            print(render_grid(config, pos))

        result = agent.train(args.train, on_step=render_training_step, render_every=args.render_every)
        print(f"Trained {result.total_episodes} episodes | success rate: {result.success_rate:.1%} | "
              f"avg_return: {result.average_reward:.3f} | final eps: {result.final_epsilon:.3f}")
        if args.save:
            try:
                path = save_value_table(table, args.save)
            except OSError as e:
                print(f"❌ Failed to save Q-table to {args.save}: {e}", file=sys.stderr)
                return 1
            print(f"Saved Q-table to {path}")

    if args.show_policy:
        print("\nGreedy policy:")
        print(render_policy(env, table))

    if args.play > 0:
        optimal = shortest_path_length(config)
        if optimal is None:
            print("⚠️  Goal is unreachable from the start cell")

        def render_play_step(episode, epsilon, pos):
            print(render_grid(config, pos))
            print()

        for number in range(1, args.play + 1):
            print(f"\n[Play {number}]")
            result = agent.evaluate(1, on_step=render_play_step if args.render else None)[0]
            line = f"Return: {result.total_reward:.2f} | Steps: {result.steps_taken}"
            if optimal is not None:
                line += f" | Optimal: {optimal}"
            if not result.success:
                line += " | goal not reached"
            print(line)
            if args.render:
                print("Actions: " + " ".join(ACTION_NAMES[a] for a in result.actions))

    if args.train == 0 and args.play == 0:
        print("Nothing to do. Try --train 10000 --save q.bin or --load q.bin --play 5 --render")

    return 0


if __name__ == "__main__":
    sys.exit(main())
