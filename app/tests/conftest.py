"""Shared fixtures for logfacade tests."""

import logging
import sys
import uuid
from collections import defaultdict

import pytest

import logfacade.logging.setup as logging_setup
from logfacade.context import ContextStore
from logfacade.logger import LoggerFacade
from logfacade.redaction import RedactionPolicy


class RecordingSink:
    """Sink keeping every written record in memory."""

    def __init__(self):
        self.records = []

    def write(self, level, message, data):
        self.records.append((level, message, data))

    @property
    def last(self):
        return self.records[-1]


class FakeEmitter:
    """Minimal event emitter exposing on()/emit()."""

    def __init__(self):
        self._listeners = defaultdict(list)

    def on(self, event, listener):
        self._listeners[event].append(listener)
        return listener

    def emit(self, event, *args):
        for listener in list(self._listeners[event]):
            listener(*args)


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def policy():
    return RedactionPolicy.from_config(hide_keys=["password"], hide_regex=["^secret"])


@pytest.fixture
def logger(sink, policy):
    """LoggerFacade writing to a RecordingSink with a small default context."""
    return LoggerFacade(sink, policy, ContextStore({"service": "test-service"}))


@pytest.fixture
def emitter():
    return FakeEmitter()


SETTINGS_ENV_VARS = (
    "LOG_LEVEL",
    "LOG_TRANSPORTS",
    "LOG_CONTEXT",
    "LOG_HIDE_KEYS",
    "LOG_HIDE_REGEX",
    "LOG_MAX_DEPTH",
    "LOG_LOGGER_NAME",
    "LOG_RENDERER",
    "APP_NAME",
    "APP_VERSION",
    "ENVIRONMENT",
    "LOG_MAX_VALUE_LENGTH",
    "LOG_HANDLE_EXCEPTIONS",
)


@pytest.fixture(autouse=True)
def isolated_logging_state(monkeypatch):
    """Reset the root logger, excepthook and settings environment per test."""
    monkeypatch.setattr(logging_setup, "_root_logger", None)
    monkeypatch.setattr(sys, "excepthook", sys.excepthook)
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def logger_name():
    """Unique transport logger name; its handlers are closed afterwards."""
    name = f"logfacade.test.{uuid.uuid4().hex}"
    yield name
    std_logger = logging.getLogger(name)
    for handler in list(std_logger.handlers):
        std_logger.removeHandler(handler)
        handler.close()
