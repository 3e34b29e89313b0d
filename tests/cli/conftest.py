import functools
from unittest.mock import AsyncMock

import click.testing
import pytest

from kgeneric._cogs.structs.credentials import ConnectionInfo
from kgeneric.cli import main


@pytest.fixture()
def runner():
    runner = click.testing.CliRunner()
    return runner


@pytest.fixture()
def invoke(runner):
    return functools.partial(runner.invoke, main)


@pytest.fixture(autouse=True)
def configure(mocker):
    """ Keep the root logger of the test session intact. """
    return mocker.patch('kgeneric._cogs.helpers.loggers.configure')


@pytest.fixture()
def login(mocker):
    info = ConnectionInfo(server='https://fake-host', default_namespace='default')
    return mocker.patch('kgeneric._cogs.clients.login.login', return_value=info)


@pytest.fixture()
def get_fn(mocker):
    async def fill(obj, *opts, info, settings):
        obj['metadata']['uid'] = 'uid1'
        obj['spec'] = {'size': 3}
    return mocker.patch('kgeneric.cli._get', new=AsyncMock(side_effect=fill))


@pytest.fixture()
def list_fn(mocker):
    async def fill(namespace, objlist, *opts, info, settings):
        objlist['items'] = [{'metadata': {'name': 'w1'}}, {'metadata': {'name': 'w2'}}]
    return mocker.patch('kgeneric.cli._list', new=AsyncMock(side_effect=fill))


@pytest.fixture()
def scan_fn(mocker):
    return mocker.patch('kgeneric.cli._scan', new=AsyncMock(return_value=[]))
