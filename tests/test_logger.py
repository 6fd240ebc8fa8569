"""
Tests for the structured logging utilities.
"""

import json
import logging
import sys

from shared.logger import JSONFormatter, ResourceLogger, get_logger


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name='test', level=logging.INFO, pathname=__file__, lineno=10,
        msg='hello %s', args=('world',), exc_info=None, func='fn'
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    """Test cases for JSONFormatter."""

    def test_basic_fields(self):
        """Test the standard fields are present."""
        entry = json.loads(JSONFormatter().format(_record()))

        assert entry['level'] == 'INFO'
        assert entry['logger'] == 'test'
        assert entry['message'] == 'hello world'
        assert entry['function'] == 'fn'
        assert entry['timestamp'].endswith('Z')
        assert 'exception' not in entry

    def test_context_fields(self):
        """Test resource context attributes are copied onto the entry."""
        record = _record(table_name='orders', region='eu-west-1', error_code='ResourceInUseException')
        entry = json.loads(JSONFormatter().format(record))

        assert entry['table_name'] == 'orders'
        assert entry['region'] == 'eu-west-1'
        assert entry['error_code'] == 'ResourceInUseException'

    def test_exception_info(self):
        """Test exception tracebacks are included."""
        try:
            raise RuntimeError('broken')
        except RuntimeError:
            record = _record()
            record.exc_info = sys.exc_info()

        entry = json.loads(JSONFormatter().format(record))
        assert 'RuntimeError: broken' in entry['exception']


class TestGetLogger:
    """Test cases for get_logger."""

    def test_single_handler(self):
        """Test repeated calls do not stack handlers."""
        logger = get_logger('test.single_handler')
        get_logger('test.single_handler')

        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, JSONFormatter)
        assert logger.propagate is False

    def test_level_updated_on_reuse(self):
        """Test a later call changes the level of an existing logger."""
        logger = get_logger('test.level_reuse', 'INFO')
        get_logger('test.level_reuse', 'WARNING')

        assert logger.level == logging.WARNING
        assert logger.handlers[0].level == logging.WARNING


class TestResourceLogger:
    """Test cases for ResourceLogger."""

    def test_context_added(self):
        """Test bound context is passed as record extras."""
        logger = ResourceLogger('test.resource', table_name='orders', region='us-east-1')
        context = logger._add_context({'status': 'CREATING'})

        assert context == {'table_name': 'orders', 'region': 'us-east-1', 'status': 'CREATING'}

    def test_bind_overrides(self):
        """Test bind returns a new logger with updated context."""
        logger = ResourceLogger('test.bind', region='us-east-1', request_type='Create')
        bound = logger.bind(table_name='orders')

        assert bound.table_name == 'orders'
        assert bound.region == 'us-east-1'
        assert bound.request_type == 'Create'
        assert logger.table_name is None

    def test_bind_keeps_level(self):
        """Test bind does not reset the logger level."""
        logger = ResourceLogger('test.bind_level', level='WARNING')
        logger.bind(table_name='orders')

        assert logger.logger.level == logging.WARNING
