import json
import logging

import pytest

from kgeneric._cogs.helpers.loggers import ObjectJsonFormatter, ObjectPrefixingJsonFormatter, \
                                           ObjectPrefixingTextFormatter, ObjectTextFormatter


def test_prefixing_text_formatter_adds_prefixes_when_namespaced(ns_record):
    formatter = ObjectPrefixingTextFormatter()
    formatted = formatter.format(ns_record)
    assert formatted == '[Widget ns1/name1] hello'


def test_prefixing_text_formatter_adds_prefixes_when_cluster(cluster_record):
    formatter = ObjectPrefixingTextFormatter()
    formatted = formatter.format(cluster_record)
    assert formatted == '[Widget name1] hello'


def test_prefixing_text_formatter_adds_only_the_kind_for_lists(list_record):
    formatter = ObjectPrefixingTextFormatter()
    formatted = formatter.format(list_record)
    assert formatted == '[Widget] hello'


def test_prefixing_text_formatter_ignores_non_object_records(plain_record):
    formatter = ObjectPrefixingTextFormatter()
    formatted = formatter.format(plain_record)
    assert formatted == 'hello'


def test_prefixing_text_formatter_keeps_the_original_record(ns_record):
    formatter = ObjectPrefixingTextFormatter()
    formatter.format(ns_record)
    assert ns_record.msg == 'hello'


def test_prefixing_json_formatter_adds_prefixes_when_namespaced(ns_record):
    formatter = ObjectPrefixingJsonFormatter()
    formatted = formatter.format(ns_record)
    decoded = json.loads(formatted)
    assert decoded['message'] == '[Widget ns1/name1] hello'


def test_prefixing_json_formatter_adds_prefixes_when_clustered(cluster_record):
    formatter = ObjectPrefixingJsonFormatter()
    formatted = formatter.format(cluster_record)
    decoded = json.loads(formatted)
    assert decoded['message'] == '[Widget name1] hello'


def test_regular_text_formatter_omits_prefixes(ns_record):
    formatter = ObjectTextFormatter()
    formatted = formatter.format(ns_record)
    assert formatted == 'hello'


def test_regular_json_formatter_omits_prefixes(ns_record):
    formatter = ObjectJsonFormatter()
    formatted = formatter.format(ns_record)
    decoded = json.loads(formatted)
    assert decoded['message'] == 'hello'


def test_json_formatter_adds_the_reference_under_the_default_key(ns_record):
    formatter = ObjectJsonFormatter()
    formatted = formatter.format(ns_record)
    decoded = json.loads(formatted)
    assert decoded['object'] == {
        'apiVersion': 'example.com/v1',
        'kind': 'Widget',
        'namespace': 'ns1',
        'name': 'name1',
    }
    assert 'k8s_ref' not in decoded


def test_json_formatter_adds_the_reference_under_a_custom_key(ns_record):
    formatter = ObjectJsonFormatter(refkey='k8s-obj')
    formatted = formatter.format(ns_record)
    decoded = json.loads(formatted)
    assert decoded['k8s-obj']['name'] == 'name1'
    assert 'object' not in decoded


def test_json_formatter_adds_no_reference_for_non_object_records(plain_record):
    formatter = ObjectJsonFormatter()
    formatted = formatter.format(plain_record)
    decoded = json.loads(formatted)
    assert 'object' not in decoded
    assert 'timestamp' in decoded


@pytest.mark.parametrize('levelno, severity', [
    (logging.DEBUG, 'debug'),
    (logging.INFO, 'info'),
    (logging.WARNING, 'warn'),
    (logging.ERROR, 'error'),
    (logging.CRITICAL, 'fatal'),
])
def test_json_formatter_adds_severity(plain_record, levelno, severity):
    plain_record.levelno = levelno
    formatter = ObjectJsonFormatter()
    formatted = formatter.format(plain_record)
    decoded = json.loads(formatted)
    assert decoded['severity'] == severity
