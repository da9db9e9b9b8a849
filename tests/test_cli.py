import pytest

from connectn.debug import debug, DebugLevel
from connectn.game.board import Board
from connectn.interfaces.cli import QUIT, RESTART, SimpleCLI, main, parse_move
from connectn.utils import Player, parse_position


def position(cells):
    return ",".join(str(c) for c in cells)


@pytest.mark.parametrize("text, expected", [
    ("14", 14),
    (" 0 ", 0),
    ("2,3", 20),
    ("q", QUIT),
    ("R", RESTART),
    ("36", None),
    ("-1", None),
    ("6,0", None),
    ("abc", None),
    ("1,2,3", None),
])
def test_parse_move(text, expected):
    assert parse_move(text, Board()) == expected


def test_parse_position_validates():
    assert parse_position("0,1, 2", 3) == (0, 1, 2)
    with pytest.raises(ValueError):
        parse_position("0,1", 3)
    with pytest.raises(ValueError):
        parse_position("0,1,5", 3)
    with pytest.raises(ValueError):
        parse_position("0,x,1", 3)


def test_test_command_reports_win(capsys):
    cells = [1, 1, 1, 1] + [0] * 32
    assert main(["test", "--position", position(cells)]) == 0
    out = capsys.readouterr().out
    assert "PLAYER_ONE_WIN" in out
    assert "Winning run: [0, 1, 2, 3]" in out


def test_test_command_suggests_a_move(capsys):
    cells = [2, 2, 2] + [0] * 33
    assert main(["test", "--position", position(cells), "--seed", "1"]) == 0
    out = capsys.readouterr().out
    assert "IN_PROGRESS" in out
    assert "Suggested move:" in out


def test_test_command_rejects_bad_position(capsys):
    assert main(["test", "--position", "0,1"]) == 1
    assert "Error parsing position" in capsys.readouterr().out


def test_invalid_board_configuration(capsys):
    assert main(["test", "--position", "0", "--rows", "2", "--cols", "2"]) == 2
    assert "Invalid board configuration" in capsys.readouterr().out


def test_no_command(capsys):
    assert SimpleCLI([]).run() == 1


def test_benchmark_runs(capsys):
    assert main(["benchmark", "--iterations", "20", "--rows", "5", "--cols", "5", "--seed", "3"]) == 0
    assert "self-play" in capsys.readouterr().out


def test_play_quit(monkeypatch, capsys):
    monkeypatch.setattr("builtins.input", lambda prompt="": "q")
    assert main(["play", "--seed", "0"]) == 0
    assert "Quitting game." in capsys.readouterr().out


def test_play_full_game_against_computer(monkeypatch, capsys):
    monkeypatch.setattr("connectn.interfaces.cli.time.sleep", lambda _: None)
    moves = iter(["x", "0", "0", "1", "2", "3", "4", "5", "6", "7", "8", "9", "10", "11", "12",
                  "13", "14", "15", "16", "17", "18", "19", "20", "21", "22", "23", "24", "25",
                  "26", "27", "28", "29", "30", "31", "32", "33", "34", "35"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(moves))
    assert main(["play", "--seed", "4"]) == 0
    assert "Game over!" in capsys.readouterr().out


def test_debug_level_option_sets_logging_level(capsys):
    cli = SimpleCLI(["test", "--position", position([0] * 36), "--debug-level", "error"])
    cli.parse_args()
    assert debug.level == DebugLevel.ERROR

    SimpleCLI(["test", "--position", position([0] * 36), "--debug"]).parse_args()
    assert debug.level == DebugLevel.DEBUG


def test_unknown_debug_level_is_rejected(capsys):
    with pytest.raises(SystemExit):
        SimpleCLI(["test", "--position", "0", "--debug-level", "loud"]).parse_args()


def test_benchmark_self_play_keeps_engine_sides(monkeypatch, capsys):
    import connectn.game.rules as rules_module
    import connectn.interfaces.cli as cli_module

    engines = []
    original = cli_module.GameEngine

    class RecordingEngine(original):
        def __init__(self, *args, **kwargs):
            super().__init__(*args, **kwargs)
            engines.append((self, self.computer))

    monkeypatch.setattr(cli_module, "GameEngine", RecordingEngine)
    monkeypatch.setattr(rules_module, "GameEngine", RecordingEngine)
    assert main(["benchmark", "--iterations", "10", "--rows", "4", "--cols", "4", "--seed", "2"]) == 0
    assert {computer for _, computer in engines} == {Player.ONE, Player.TWO}
    assert all(engine.computer == computer for engine, computer in engines)
