import asyncio
import logging
import re
from unittest.mock import AsyncMock, MagicMock

import pytest
from aresponses import ResponsesMockServer

from kgeneric._cogs.clients.auth import APIContext
from kgeneric._cogs.configs.configuration import AccessSettings
from kgeneric._cogs.structs.credentials import ConnectionInfo
from kgeneric._cogs.structs.references import GroupVersionKind, Resource


@pytest.fixture()
def namespaced_resource():
    """ The resource used in the tests. Usually mocked, so it does not matter. """
    return Resource('example.com', 'v1', 'widgets', kind='Widget', namespaced=True)


@pytest.fixture()
def cluster_resource():
    """ The resource used in the tests. Usually mocked, so it does not matter. """
    return Resource('example.com', 'v1', 'clusterwidgets', kind='ClusterWidget', namespaced=False)


@pytest.fixture(params=[True, False], ids=['namespaced', 'cluster'])
def resource(request):
    """ The resource used in the tests. Usually mocked, so it does not matter. """
    if request.param:
        return Resource('example.com', 'v1', 'widgets', kind='Widget', namespaced=True)
    else:
        return Resource('example.com', 'v1', 'clusterwidgets', kind='ClusterWidget', namespaced=False)


@pytest.fixture()
def namespace(resource):
    return 'ns1' if resource.namespaced else None


@pytest.fixture()
def gvk(resource):
    return GroupVersionKind(group=resource.group, version=resource.version, kind=resource.kind)


@pytest.fixture()
def settings():
    return AccessSettings()


@pytest.fixture()
def logger():
    return logging.getLogger('kgeneric.tests')


#
# Mocks for Kubernetes API. Reasons:
# 1. We do not test aiohttp, we test the layers on top of it,
#    so everything low-level should be faked and assumed to be functional.
# 2. No external calls must be made under any circumstances.
#    The unit-tests must be fully isolated from the environment.
#

@pytest.fixture()
def hostname():
    """ A fake hostname to be used in all aiohttp/aresponses tests. """
    return 'fake-host'


@pytest.fixture()
def connection_info(hostname):
    return ConnectionInfo(server=f'https://{hostname}', default_namespace='default')


@pytest.fixture()
async def context(connection_info):
    """
    An API context with a real aiohttp session, as used by all the API calls.

    All the requests to the fake host are intercepted by ``aresponses``.
    """
    context = APIContext(connection_info)
    try:
        yield context
    finally:
        await context.close()


@pytest.fixture()
async def aresponses():
    """ A fake API server for all aiohttp requests, bound to the running loop. """
    async with ResponsesMockServer(loop=asyncio.get_running_loop()) as server:
        yield server


@pytest.fixture()
def resp_mocker(aresponses):
    """
    A factory of server-side callbacks for `aresponses` with mocking/spying.

    The value of the fixture is a function, which return a coroutine mock.
    That coroutine mock should be passed to `aresponses.add` as a response
    callback function. When called, it calls the mock defined by the function's
    arguments (specifically, return_value or side_effects).

    The difference from passing the responses directly to `aresponses.add`
    is that it is possible to assert on whether the response was handled
    by that callback at all (i.e. HTTP URL & method matched), especially
    if there are multiple responses registered. The requests are available
    as the positional arguments of the calls for assertions on the queries.

    Sample usage::

        def test_me(resp_mocker):
            response = aiohttp.web.json_response({'a': 'b'})
            callback = resp_mocker(return_value=response)
            aresponses.add(hostname, '/path/', 'get', callback)
            do_something()
            assert callback.called
            assert callback.call_count == 1
            assert callback.call_args[0][0].query['x'] == 'y'
    """
    def resp_maker(*args, **kwargs):
        actual_response = MagicMock(*args, **kwargs)

        async def resp_mock_effect(request):
            # Get a response/error as it was intended (via return_value/side_effect).
            return actual_response()

        return AsyncMock(side_effect=resp_mock_effect)
    return resp_maker


#
# Helpers for the logging checks.
#

@pytest.fixture()
def assert_logs(caplog):
    """
    A function to assert the logs are present (by pattern).

    The listed message patterns MUST be present, in the order specified.
    Some other log messages can also be present, but they are ignored.
    """
    caplog.set_level(logging.DEBUG)

    def assert_logs_fn(patterns=(), prohibited=(), strict=False):
        __traceback_hide__ = True
        remaining_patterns = list(patterns)
        for message in caplog.messages:
            # The expected pattern is at position 0.
            # Looking-ahead: if one of the following patterns matches, while the
            # 0th does not, then the log message is missing, and we fail the test.
            for idx, pattern in enumerate(remaining_patterns):
                m = re.search(pattern, message)
                if m:
                    if idx == 0:
                        remaining_patterns[:1] = []
                        break  # out of `remaining_patterns` cycle
                    else:
                        skipped_patterns = remaining_patterns[:idx]
                        raise AssertionError(f"Few patterns were skipped: {skipped_patterns!r}")
                elif strict:
                    raise AssertionError(f"Unexpected log message: {message!r}")

            # Check that the prohibited patterns do not appear in any message.
            for pattern in prohibited:
                m = re.search(pattern, message)
                if m:
                    raise AssertionError(f"Prohibited log pattern found: {message!r} ~ {pattern!r}")

        # If all patterns have been matched in order, we are done.
        # if some are left, but the messages are over, then we fail.
        if remaining_patterns:
            raise AssertionError(f"Few patterns were missed: {remaining_patterns!r}")

    return assert_logs_fn
