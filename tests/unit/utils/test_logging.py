"""Unit tests for JSON logging in logging.py."""

import json
import logging
import sys
from pathlib import Path

import pytest

from urlshortener.utils.logging import JsonFormatter, initialize_logging


def _record(msg='Hello %s', args=('world',), exc_info=None, **extra):
    record = logging.LogRecord('urlshortener.test', logging.INFO, __file__, 10, msg, args, exc_info)
    record.created = 1760529600.123  # 2025-10-15T12:00:00.123Z
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_emits_json_line():
    log = json.loads(JsonFormatter().format(_record()))
    assert log == {
        'timestamp': '2025-10-15T12:00:00.123Z',
        'level': 'INFO',
        'logger': 'urlshortener.test',
        'message': 'Hello world',
    }


def test_formatter_includes_extras():
    log = json.loads(JsonFormatter().format(_record(shortcode='abc123', event='REDIRECT_SUCCESS', attempts=2)))
    assert log['shortcode'] == 'abc123'
    assert log['event'] == 'REDIRECT_SUCCESS'
    assert log['attempts'] == 2


def test_formatter_serializes_unknown_types_as_strings():
    log = json.loads(JsonFormatter().format(_record(path=Path('/tmp/x'))))
    assert log['path'] == '/tmp/x'


def test_formatter_includes_exception():
    try:
        raise ValueError('boom')
    except ValueError:
        record = _record(exc_info=sys.exc_info())
    log = json.loads(JsonFormatter().format(record))
    assert 'ValueError: boom' in log['exception']


@pytest.mark.parametrize('level, expected', [(None, logging.INFO), ('debug', logging.DEBUG), ('WARNING', logging.WARNING)])
def test_initialize_logging(monkeypatch, level, expected):
    if level is None:
        monkeypatch.delenv('LOG_LEVEL', raising=False)
    else:
        monkeypatch.setenv('LOG_LEVEL', level)

    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        initialize_logging()
        assert root.level == expected
        assert any(isinstance(handler.formatter, JsonFormatter) for handler in root.handlers)
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)


def test_initialize_logging_explicit_level_quiets_boto(monkeypatch):
    monkeypatch.setenv('LOG_LEVEL', 'INFO')

    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        initialize_logging('debug')
        assert root.level == logging.DEBUG
        assert logging.getLogger('botocore').level == logging.WARNING
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
