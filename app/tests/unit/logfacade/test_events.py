"""Unit tests for logfacade.events module.

Tests cover:
- encode_event_args() filtering and encoding
- format_event_message() wire format
- bind_events() / LoggerFacade.log_event() bridging
"""

import pytest

from logfacade.events import bind_events, encode_event_args, format_event_message
from logfacade.exceptions import InvalidLevelError, SerializationError


@pytest.mark.unit
class TestEncodeEventArgs:
    """Test suite for encode_event_args()."""

    def test_keeps_scalars_in_order(self):
        assert encode_event_args(["a", 1, True, 2.5]) == '["a",1,true,2.5]'

    def test_discards_objects_and_callables(self):
        """None, containers, objects and callables are dropped."""
        args = ["a", None, {"x": 1}, [1], (2,), print, object(), lambda: None, 3]

        assert encode_event_args(args) == '["a",3]'

    def test_empty_args(self):
        assert encode_event_args([]) == "[]"

    def test_non_finite_float_raises(self):
        with pytest.raises(SerializationError):
            encode_event_args([float("nan")])


@pytest.mark.unit
class TestFormatEventMessage:
    """Test suite for format_event_message()."""

    def test_message_has_no_closing_parenthesis(self):
        assert format_event_message("open", (42,)) == "(open: [42]"

    def test_custom_encoder(self):
        message = format_event_message("data", ("a", "b"), lambda args: "|".join(args))

        assert message == "(data: a|b"


@pytest.mark.unit
class TestBindEvents:
    """Test suite for event bridging."""

    def test_emission_is_logged_at_bound_level(self, logger, sink, emitter):
        logger.log_event(emitter, {"open": "info"})

        emitter.emit("open", 42)

        level, message, data = sink.last
        assert level == "info"
        assert message == "(open: [42]"
        assert data == {"service": "test-service"}

    def test_each_event_uses_its_level(self, logger, sink, emitter):
        logger.log_event(emitter, {"open": "debug", "close": "warn", "fail": "error"})

        emitter.emit("open")
        emitter.emit("close", "bye")
        emitter.emit("fail", 500, {"detail": "ignored"})

        assert [(level, message) for level, message, _ in sink.records] == [
            ("debug", "(open: []"),
            ("warn", '(close: ["bye"]'),
            ("error", "(fail: [500]"),
        ]

    def test_alert_level_flags_record(self, logger, sink, emitter):
        logger.log_event(emitter, {"breach": "alert"})

        emitter.emit("breach")

        level, _, data = sink.last
        assert level == "error"
        assert data["alert"] is True

    def test_unknown_event_never_fires(self, logger, sink, emitter):
        """Bindings for events that are never emitted are silent."""
        logger.log_event(emitter, {"missing": "info"})

        emitter.emit("other", 1)

        assert sink.records == []

    def test_unknown_level_rejected_at_bind(self, logger, emitter):
        with pytest.raises(InvalidLevelError, match="verbose"):
            logger.log_event(emitter, {"open": "verbose"})

    def test_custom_encoder(self, logger, sink, emitter):
        logger.log_event(emitter, {"open": "info"}, encoder=lambda args: str(len(args)))

        emitter.emit("open", 1, 2, 3)

        assert sink.last[1] == "(open: 3"

    def test_encoding_failure_propagates(self, logger, emitter):
        logger.log_event(emitter, {"metric": "info"})

        with pytest.raises(SerializationError):
            emitter.emit("metric", float("inf"))

    def test_returns_listeners(self, logger, sink, emitter):
        listeners = bind_events(emitter, {"open": "info", "close": "info"}, logger)

        assert set(listeners) == {"open", "close"}
        listeners["close"]("direct")
        assert sink.last[1] == '(close: ["direct"]'
