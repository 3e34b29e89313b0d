import logging.handlers

import pytest

from kgeneric._cogs.helpers.loggers import ObjectLogger
from kgeneric._cogs.structs.references import GroupVersionKind, ObjectAddress

WIDGET = GroupVersionKind('example.com', 'v1', 'Widget')


@pytest.fixture(autouse=True)
def _caplog_all_levels(caplog):
    caplog.set_level(0)


def _make_record(gvk, address):
    handler = logging.handlers.BufferingHandler(capacity=100)
    logger = logging.getLogger('kgeneric.tests.logging')
    logger.setLevel(logging.DEBUG)
    logger.addHandler(handler)
    try:
        ObjectLogger(gvk=gvk, address=address, logger=logger).info("hello")
    finally:
        logger.removeHandler(handler)
    return handler.buffer[0]


@pytest.fixture()
def ns_record():
    return _make_record(WIDGET, ObjectAddress(namespace='ns1', name='name1'))


@pytest.fixture()
def cluster_record():
    return _make_record(WIDGET, ObjectAddress(namespace=None, name='name1'))


@pytest.fixture()
def list_record():
    return _make_record(WIDGET, ObjectAddress(namespace='ns1', name=None))


@pytest.fixture()
def plain_record():
    return logging.LogRecord('kgeneric.tests.logging', logging.INFO, __file__, 1, "hello", (), None)
