"""qgrid - tabular Q-learning in a small deterministic grid world.

This package implements a Q-Learning agent with epsilon-greedy exploration
that learns shortest paths through grid mazes, plus a command-line front end
for training, greedy playback and value-table persistence.
"""

__version__ = "1.0.0"
