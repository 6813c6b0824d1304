import json

from qgrid.__main__ import main
from qgrid.domain.value_table import ValueTable
from qgrid.utils.table_storage import load_value_table, save_value_table
from qgrid.utils.maze_serialization import load_maze


def test_nothing_to_do(capsys):
    assert main([]) == 0
    assert "Nothing to do" in capsys.readouterr().out


def test_invalid_size_exits(capsys):
    assert main(["--size", "11", "5", "--train", "10"]) == 1
    captured = capsys.readouterr()
    assert "Invalid size 11x5" in captured.err
    assert "Episode" not in captured.out


def test_train_save_then_play(tmp_path, capsys):
    path = tmp_path / "q.bin"
    assert main(["--train", "200", "--save", str(path), "--seed", "4"]) == 0
    out = capsys.readouterr().out
    assert "Episode   100 | avg_len:" in out
    assert "Episode   200 | avg_len:" in out
    assert f"Saved Q-table to {path}" in out

    table = load_value_table(path)
    assert (table.width, table.height) == (5, 5)

    assert main(["--load", str(path), "--play", "2", "--render"]) == 0
    out = capsys.readouterr().out
    assert "Loaded Q-table 5x5" in out
    assert out.count("Return:") == 2
    assert "Optimal: 8" in out
    assert "A . . . ." in out


def test_missing_table_is_fatal(tmp_path, capsys):
    assert main(["--load", str(tmp_path / "missing.bin"), "--play", "1"]) == 1
    captured = capsys.readouterr()
    assert "Failed to load Q-table" in captured.err
    assert "Return:" not in captured.out


def test_corrupt_table_is_fatal(tmp_path, capsys):
    path = tmp_path / "q.bin"
    path.write_bytes(ValueTable.zeros(5, 5).to_bytes()[:20])
    assert main(["--load", str(path), "--play", "1"]) == 1
    assert "Return:" not in capsys.readouterr().out


def test_dimension_mismatch_is_fatal(tmp_path, capsys):
    path = tmp_path / "q.bin"
    save_value_table(ValueTable.zeros(3, 3), path)
    assert main(["--load", str(path), "--size", "5", "5", "--play", "1"]) == 1
    err = capsys.readouterr().err
    assert "3x3" in err
    assert "5x5" in err


def test_export_and_use_maze(tmp_path, capsys):
    maze_path = tmp_path / "maze.json"
    assert main(["--size", "6", "4", "--export-maze", str(maze_path)]) == 0
    maze = load_maze(str(maze_path))
    assert (maze.width, maze.height) == (6, 4)

    assert main(["--maze", str(maze_path), "--train", "50", "--report-every", "25",
                 "--seed", "2", "--show-policy"]) == 0
    out = capsys.readouterr().out
    assert "Episode    50 | avg_len:" in out
    assert "Greedy policy:" in out


def test_render_every_prints_training_frames(capsys):
    assert main(["--train", "2", "--render-every", "2", "--seed", "0", "--report-every", "0"]) == 0
    out = capsys.readouterr().out
    assert "[Episode 2 | eps=" in out
    assert "[Episode 1 |" not in out


def test_malformed_maze_is_fatal(tmp_path, capsys):
    maze_path = tmp_path / "maze.json"
    maze_path.write_text(json.dumps({"width": 5, "height": 5, "walls": [[1]], "start": [0.5, 0], "goal": [4, 4]}))
    assert main(["--maze", str(maze_path), "--train", "5"]) == 1
    captured = capsys.readouterr()
    assert captured.err.startswith("❌")
    assert "Trained" not in captured.out


def test_negative_seed_wraps_to_32_bits(tmp_path):
    wrapped = tmp_path / "wrapped.bin"
    unsigned = tmp_path / "unsigned.bin"
    assert main(["--seed", "-1", "--train", "20", "--save", str(wrapped)]) == 0
    assert main(["--seed", str(2 ** 32 - 1), "--train", "20", "--save", str(unsigned)]) == 0
    assert load_value_table(wrapped) == load_value_table(unsigned)


def test_failed_load_leaves_no_exported_maze(tmp_path):
    maze_path = tmp_path / "maze.json"
    assert main(["--load", str(tmp_path / "missing.bin"), "--export-maze", str(maze_path)]) == 1
    assert not maze_path.exists()


def test_size_with_maze_warns(tmp_path, capsys):
    maze_path = tmp_path / "maze.json"
    assert main(["--export-maze", str(maze_path)]) == 0
    capsys.readouterr()

    assert main(["--maze", str(maze_path), "--size", "7", "7"]) == 0
    captured = capsys.readouterr()
    assert "--size is ignored" in captured.err
    assert "5x5" in captured.out


def test_training_summary_and_action_names(tmp_path, capsys):
    path = tmp_path / "q.bin"
    save_value_table(ValueTable.zeros(5, 5), path)
    assert main(["--load", str(path), "--train", "10", "--seed", "3", "--report-every", "0"]) == 0
    out = capsys.readouterr().out
    assert "Trained 10 episodes | success rate:" in out
    assert "final eps: 0.975" in out

    assert main(["--load", str(path), "--play", "1", "--render"]) == 0
    out = capsys.readouterr().out
    # untrained table: every tie goes to "up"
    assert "Actions: up up" in out
    assert "goal not reached" in out
