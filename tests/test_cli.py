import logging

import pytest

from boggle.cli import main, run
from boggle.errors import UsageError

BOARD = "abcd\nefgh\nijkl\nmnop\n"
DICTIONARY = "abcd\nafkp\nlies\nmapb\nabab\nabc\n"


@pytest.fixture
def files(tmp_path):
    dict_path = tmp_path / "dictionary"
    board_path = tmp_path / "board"
    dict_path.write_text(DICTIONARY)
    board_path.write_text(BOARD)
    return str(dict_path), str(board_path)


@pytest.mark.parametrize("extra", [[], ["--strategy", "filter"], ["--parallel", "--workers", "2"]])
def test_prints_count(files, capsys, extra):
    assert main([*files, *extra]) == 0
    assert capsys.readouterr().out.strip() == "Found 2 matches!"


def test_list_and_timings(files, capsys):
    assert run([*files, "--list", "--timings"]) == 2
    out = capsys.readouterr().out.splitlines()
    assert out[:3] == ["abcd", "afkp", "Found 2 matches!"]
    assert "total=" in out[3]


def test_min_length(files, capsys):
    assert run([*files, "--min-length", "3"]) == 3


def test_bad_board_exits_with_error(tmp_path, capsys):
    board = tmp_path / "board"
    board.write_text("ab\ncd\n")
    dictionary = tmp_path / "dictionary"
    dictionary.write_text(DICTIONARY)
    assert main([str(dictionary), str(board)]) == 1
    assert capsys.readouterr().out.strip() == "board must be at least 3 x 3"


def test_missing_file_exits_with_error(tmp_path, capsys):
    assert main([str(tmp_path / "nope"), str(tmp_path / "nope")]) == 1
    assert "nope" in capsys.readouterr().out


def test_usage_error():
    with pytest.raises(UsageError, match="USAGE"):
        run([])
    assert main(["only-one"]) == 1


def test_stage_logs_hidden_by_default(files, capsys, caplog):
    boggle_logger = logging.getLogger("boggle")
    try:
        assert main([*files, "--timings"]) == 0
        assert boggle_logger.level == logging.WARNING
        assert not [r for r in caplog.records if "stage=" in r.getMessage()]
        assert "stage=" not in capsys.readouterr().err
    finally:
        boggle_logger.setLevel(logging.NOTSET)
