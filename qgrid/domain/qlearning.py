"""Q-Learning training and greedy evaluation loops."""

from typing import Optional, List, Callable
from .types import Coord, TrainingConfig, Episode, WindowStats, TrainingResult, PathfindingResult
from .environment import GridEnvironment
from .value_table import ValueTable
from .exploration import EpsilonSchedule, ExplorationPolicy
from ..utils.rng import SeededRNG

# on_step(episode_number, epsilon, position) is called before every step of a
# rendered episode; evaluation passes epsilon 0.0.
StepCallback = Callable[[int, float, Coord], None]
ReportCallback = Callable[[WindowStats], None]


def print_window_stats(stats: WindowStats):
    """Default training report: one line per reporting window."""
    print(f"Episode {stats.episode:5d} | avg_len: {stats.mean_steps:6.2f} | "
          f"avg_return: {stats.mean_return:7.3f}")


def run_greedy_episode(env: GridEnvironment, table: ValueTable,
                       on_step: Optional[StepCallback] = None,
                       episode_number: int = 1) -> PathfindingResult:
    """Follow the greedy policy from the start cell until goal or step limit."""
    table.ensure_matches(env.width, env.height)

    state = env.start
    result = PathfindingResult(path=[state])
    while True:
        if on_step:
            on_step(episode_number, 0.0, state)

        # Always choose best action (no exploration)
        action = table.best_action(env.state_id(state))
        state, reward, done = env.step(state, action)

        result.actions.append(action)
        result.path.append(state)
        result.total_reward += reward
        result.steps_taken += 1

        if done:
            result.found = True
            break
        if result.steps_taken >= env.step_limit:
            break

    return result


class QLearningAgent:
    """Tabular Q-Learning agent for a grid environment."""

    def __init__(self, env: GridEnvironment, table: ValueTable,
                 config: Optional[TrainingConfig] = None,
                 rng: Optional[SeededRNG] = None):
        table.ensure_matches(env.width, env.height)
        self.env = env
        self.table = table
        self.config = config or TrainingConfig()
        self.rng = rng or SeededRNG()
        self.schedule = EpsilonSchedule.from_config(self.config)
        self.policy = ExplorationPolicy(table, self.rng)
        self.episodes_completed = 0
        self.epsilon = self.schedule(1)

    def update_q_value(self, state: int, action: int, reward: float,
                       next_state: int, done: bool) -> float:
        """Update Q-value using Q-learning update rule and return the new value."""
        current_q = self.table.get(state, action)
        next_q_max = 0.0 if done else self.table.best_value(next_state)

        target = reward + self.config.discount_factor * next_q_max
        new_q = current_q + self.config.learning_rate * (target - current_q)

        self.table.update(state, action, new_q)
        return new_q

    def train_episode(self, on_step: Optional[StepCallback] = None) -> Episode:
        """Run one training episode at the scheduled epsilon."""
        number = self.episodes_completed + 1
        epsilon = self.schedule(number)
        self.epsilon = epsilon

        pos = self.env.start
        steps = 0
        episode_reward = 0.0
        done = False

        while True:
            if on_step:
                on_step(number, epsilon, pos)

            state = self.env.state_id(pos)
            action = self.policy.decide(state, epsilon)
            next_pos, reward, done = self.env.step(pos, action)

            self.update_q_value(state, action, reward, self.env.state_id(next_pos), done)

            episode_reward += reward
            steps += 1
            pos = next_pos
            if done or steps >= self.env.step_limit:
                break

        self.episodes_completed = number
        return Episode(
            number=number,
            steps=steps,
            total_reward=episode_reward,
            reached_goal=done,
            epsilon_used=epsilon
        )

    def train(self, episodes: int,
              on_report: Optional[ReportCallback] = print_window_stats,
              on_step: Optional[StepCallback] = None,
              render_every: int = 0) -> TrainingResult:
        """
        Train the agent for a number of episodes.

        Args:
            episodes: Number of episodes to run
            on_report: Receives window statistics every ``report_interval`` episodes
            on_step: Receives every step of each ``render_every``-th episode
            render_every: Render cadence in episodes (0 disables)

        Returns:
            TrainingResult with per-episode records and window reports
        """
        episodes_list: List[Episode] = []
        reports: List[WindowStats] = []
        interval = self.config.report_interval
        window_steps = 0
        window_return = 0.0
        window_count = 0

        for _ in range(episodes):
            number = self.episodes_completed + 1
            rendered = render_every > 0 and number % render_every == 0
            episode = self.train_episode(on_step if rendered else None)
            episodes_list.append(episode)

            window_steps += episode.steps
            window_return += episode.total_reward
            window_count += 1

            if interval > 0 and episode.number % interval == 0:
                stats = WindowStats(
                    episode=episode.number,
                    episodes=window_count,
                    mean_steps=window_steps / window_count,
                    mean_return=window_return / window_count,
                    epsilon=episode.epsilon_used
                )
                reports.append(stats)
                if on_report:
                    on_report(stats)
                window_steps = 0
                window_return = 0.0
                window_count = 0

        successful = sum(1 for ep in episodes_list if ep.reached_goal)
        total_reward = sum(ep.total_reward for ep in episodes_list)
        return TrainingResult(
            episodes=episodes_list,
            total_episodes=len(episodes_list),
            successful_episodes=successful,
            average_reward=total_reward / len(episodes_list) if episodes_list else 0.0,
            final_epsilon=self.epsilon,
            reports=reports
        )

    def evaluate(self, episodes: int,
                 on_step: Optional[StepCallback] = None) -> List[PathfindingResult]:
        """Replay the greedy policy for a number of episodes."""
        return [
            run_greedy_episode(self.env, self.table, on_step, episode_number=n)
            for n in range(1, episodes + 1)
        ]
