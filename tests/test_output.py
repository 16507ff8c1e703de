"""Tests for the CLI event renderer."""

import re

import pytest

from syncfiles.cli._output import ConsoleSink
from syncfiles.events import (
    Copy,
    DeletionSkipped,
    Error,
    MaxDepthSkipped,
    Remove,
    WatchStarted,
)


@pytest.fixture
def sink(tmp_path):
    return ConsoleSink(root=str(tmp_path))


class TestConsoleSink:
    def test_copy_relative_paths(self, sink, tmp_path, capsys):
        sink.emit(Copy(str(tmp_path / "src" / "a.txt"), str(tmp_path / "dst" / "a.txt")))
        out = capsys.readouterr().out
        assert out.strip() == "COPY src/a.txt to dst/a.txt"

    def test_remove(self, sink, tmp_path, capsys):
        sink.emit(Remove(str(tmp_path / "dst" / "old.txt")))
        assert capsys.readouterr().out.strip() == "DELETE dst/old.txt"

    def test_low_priority_hidden(self, sink, tmp_path, capsys):
        sink.emit(MaxDepthSkipped(str(tmp_path / "deep")))
        sink.emit(DeletionSkipped(str(tmp_path / "extra")))
        captured = capsys.readouterr()
        assert captured.out == "" and captured.err == ""

    def test_low_priority_verbose(self, tmp_path, capsys):
        sink = ConsoleSink(verbose=True, root=str(tmp_path))
        sink.emit(MaxDepthSkipped(str(tmp_path / "deep")))
        sink.emit(DeletionSkipped(str(tmp_path / "extra")))
        err = capsys.readouterr().err
        assert "MAX-DEPTH: deep too deep" in err
        assert "IGNORED: extra extraneous but not deleted" in err

    def test_watch_enables_timestamps(self, sink, tmp_path, capsys):
        sink.emit(WatchStarted(str(tmp_path / "src")))
        sink.emit(Remove(str(tmp_path / "dst" / "x")))
        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == "WATCHING src"
        assert re.match(r"^\[\d\d:\d\d:\d\d\] DELETE dst/x$", lines[1])

    def test_error_exits_with_default_code(self, sink, capsys):
        with pytest.raises(SystemExit) as exc_info:
            sink.emit(Error("disk on fire"))
        assert exc_info.value.code == 2
        assert "disk on fire" in capsys.readouterr().err

    def test_error_exits_with_given_code(self, sink):
        with pytest.raises(SystemExit) as exc_info:
            sink.emit(Error("bad", code=7))
        assert exc_info.value.code == 7

    def test_error_timestamped_while_watching(self, sink, tmp_path, capsys):
        sink.emit(WatchStarted(str(tmp_path / "src")))
        with pytest.raises(SystemExit):
            sink.emit(Error("inotify watch limit reached"))
        err = capsys.readouterr().err
        assert re.match(r"^\[\d\d:\d\d:\d\d\] inotify watch limit reached$",
                        err.strip())

    def test_error_not_timestamped_before_watching(self, sink, capsys):
        with pytest.raises(SystemExit):
            sink.emit(Error("disk on fire"))
        assert capsys.readouterr().err.strip() == "disk on fire"
