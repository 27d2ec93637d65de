import json
import logging

import pytest

from breakout.scoreboard import LeaderboardFormatError, Scoreboard, ScoreEntry, parse_entries


@pytest.fixture
def board_path(tmp_path):
    return tmp_path / "leaderboard.json"


def test_missing_file_is_an_empty_board(board_path):
    board = Scoreboard(str(board_path))

    assert board.load() == []
    assert board.top_scores() == ()


def test_corrupt_file_recovers_as_empty(board_path, caplog):
    board_path.write_text("{not json", encoding="utf-8")
    board = Scoreboard(str(board_path))

    with caplog.at_level(logging.WARNING, logger="breakout.scoreboard"):
        assert board.load() == []

    assert "Ignoring unreadable leaderboard" in caplog.text


def test_invalid_utf8_recovers_as_empty(board_path, caplog):
    board_path.write_bytes(b'[{"score": 1, "lives": 0}, "\xff\xfe"]')
    board = Scoreboard(str(board_path))

    with caplog.at_level(logging.WARNING, logger="breakout.scoreboard"):
        assert board.load() == []

    assert board.top_scores() == ()
    assert "Ignoring unreadable leaderboard" in caplog.text


def test_deeply_nested_document_recovers_as_empty(board_path, caplog):
    board_path.write_text("[" * 200000 + "]" * 200000, encoding="utf-8")
    board = Scoreboard(str(board_path))

    with caplog.at_level(logging.WARNING, logger="breakout.scoreboard"):
        assert board.load() == []

    assert "Ignoring unreadable leaderboard" in caplog.text


def test_non_array_document_recovers_as_empty(board_path):
    board_path.write_text(json.dumps({"score": 10, "lives": 1}), encoding="utf-8")

    assert Scoreboard(str(board_path)).load() == []


def test_parse_entries_rejects_non_arrays():
    with pytest.raises(LeaderboardFormatError):
        parse_entries({"score": 1})


def test_malformed_entries_are_dropped(board_path):
    board_path.write_text(json.dumps([
        {"score": 30, "lives": 1},
        {"score": 50},
        "junk",
        {"lives": 2},
        {"score": "40", "lives": 0},
        {"score": 20, "lives": 0, "extra": True},
    ]), encoding="utf-8")

    entries = Scoreboard(str(board_path)).load()

    assert entries == [ScoreEntry(30, 1), ScoreEntry(20, 0)]


def test_load_ranks_and_caps(board_path):
    board_path.write_text(json.dumps([{"score": s, "lives": 0} for s in range(12)]), encoding="utf-8")

    entries = Scoreboard(str(board_path)).load()

    assert [e.score for e in entries] == list(range(11, 1, -1))


def test_add_score_ranks_and_persists(board_path):
    board = Scoreboard(str(board_path))
    board.load()

    board.add_score(40, 0)
    board.add_score(90, 2)
    result = board.add_score(60, 1)

    assert result == [ScoreEntry(90, 2), ScoreEntry(60, 1), ScoreEntry(40, 0)]
    on_disk = json.loads(board_path.read_text(encoding="utf-8"))
    assert on_disk == [
        {"score": 90, "lives": 2},
        {"score": 60, "lives": 1},
        {"score": 40, "lives": 0},
    ]
    assert Scoreboard(str(board_path)).load() == result


def test_ties_keep_insertion_order(board_path):
    board = Scoreboard(str(board_path))

    board.add_score(50, 1)
    board.add_score(50, 2)
    board.add_score(70, 0)

    assert board.top_scores() == (ScoreEntry(70, 0), ScoreEntry(50, 1), ScoreEntry(50, 2))


def test_only_top_ten_are_kept(board_path):
    board = Scoreboard(str(board_path))
    for score in range(10, 120, 10):
        board.add_score(score, 0)

    scores = [entry.score for entry in board.top_scores()]
    assert len(scores) == 10
    assert scores[0] == 110
    assert 10 not in scores

    board.add_score(5, 3)
    assert ScoreEntry(5, 3) not in board.top_scores()
    board.add_score(115, 3)
    assert board.top_scores()[0] == ScoreEntry(115, 3)


def test_top_scores_is_stable_between_writes(board_path):
    board = Scoreboard(str(board_path))
    board.add_score(10, 1)

    assert board.top_scores() == board.top_scores()


def test_write_failure_is_not_fatal(tmp_path, caplog):
    board = Scoreboard(str(tmp_path / "missing-dir" / "leaderboard.json"))

    with caplog.at_level(logging.WARNING, logger="breakout.scoreboard"):
        result = board.add_score(25, 1)

    assert result == [ScoreEntry(25, 1)]
    assert "Could not save leaderboard" in caplog.text
