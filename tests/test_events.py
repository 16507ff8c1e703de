"""Tests for events and sinks."""

import pytest

from syncfiles.events import (
    CallbackSink,
    Copy,
    DeletionSkipped,
    Error,
    EventKind,
    EventLog,
    MaxDepthSkipped,
    Remove,
    WatchStarted,
    as_sink,
)


class TestPayloads:
    @pytest.mark.parametrize("event,kind,payload", [
        (Copy("/a", "/b"), "copy", ("/a", "/b")),
        (Remove("/a"), "remove", "/a"),
        (Error("boom"), "error", ("boom", None)),
        (Error("boom", 3), "error", ("boom", 3)),
        (WatchStarted("/src"), "watch", "/src"),
        (MaxDepthSkipped("/src/deep"), "max-depth", "/src/deep"),
        (DeletionSkipped("/dst/x"), "no-delete", "/dst/x"),
    ])
    def test_kind_and_payload(self, event, kind, payload):
        assert event.kind == kind
        assert str(event.kind) == kind
        assert event.payload == payload

    def test_events_compare_by_value(self):
        assert Copy("/a", "/b") == Copy("/a", "/b")
        assert Remove("/a") != DeletionSkipped("/a")


class TestSinks:
    def test_callback_sink(self):
        received = []
        sink = CallbackSink(lambda kind, payload: received.append((kind, payload)))
        sink.emit(Copy("/a", "/b"))
        sink.emit(MaxDepthSkipped("/x"))
        assert received == [("copy", ("/a", "/b")), ("max-depth", "/x")]

    def test_event_log(self):
        log = EventLog()
        log.emit(Remove("/a"))
        log.emit(Error("bad"))
        assert len(log) == 2
        assert log.kinds() == [EventKind.REMOVE, EventKind.ERROR]
        assert log.of_kind("error") == [Error("bad")]
        log.clear()
        assert list(log) == []

    def test_as_sink_passthrough(self):
        log = EventLog()
        assert as_sink(log) is log

    def test_as_sink_callback(self):
        assert isinstance(as_sink(lambda k, p: None), CallbackSink)

    def test_as_sink_none_discards(self):
        as_sink(None).emit(Copy("/a", "/b"))

    def test_as_sink_rejects_garbage(self):
        with pytest.raises(TypeError):
            as_sink(42)
