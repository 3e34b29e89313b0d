import asyncio
import functools
import json
from typing import Any, Callable, Collection, List, Optional

import click
import yaml

from kgeneric._cogs.clients import auth, errors, login, scanning
from kgeneric._cogs.configs import configuration
from kgeneric._cogs.helpers import loggers
from kgeneric._cogs.structs import credentials, references
from kgeneric._core.access import errors as access_errors
from kgeneric._core.access import operations, options


class LogFormatParamType(click.Choice):

    def __init__(self) -> None:
        super().__init__(choices=[v.name.lower() for v in loggers.LogFormat])

    def convert(self, value: Any, param: Any, ctx: Any) -> loggers.LogFormat:
        if isinstance(value, loggers.LogFormat):
            return value
        name: str = super().convert(value, param, ctx)
        return loggers.LogFormat[name.upper()]


def logging_options(fn: Callable[..., Any]) -> Callable[..., Any]:
    """ A decorator to configure logging in all commands the same way."""
    @click.option('-v', '--verbose', is_flag=True)
    @click.option('-d', '--debug', is_flag=True)
    @click.option('-q', '--quiet', is_flag=True)
    @click.option('--log-format', type=LogFormatParamType(), default='full')
    @click.option('--log-refkey', type=str)
    @click.option('--log-prefix/--no-log-prefix', default=None)
    @functools.wraps(fn)  # to preserve other opts/args
    def wrapper(verbose: bool, quiet: bool, debug: bool,
                log_format: loggers.LogFormat = loggers.LogFormat.FULL,
                log_prefix: Optional[bool] = False,
                log_refkey: Optional[str] = None,
                *args: Any, **kwargs: Any) -> Any:
        loggers.configure(debug=debug, verbose=verbose, quiet=quiet,
                          log_format=log_format, log_refkey=log_refkey, log_prefix=log_prefix)
        return fn(*args, **kwargs)

    return wrapper


def connection_options(fn: Callable[..., Any]) -> Callable[..., Any]:
    """ A decorator to log into the cluster in all commands the same way."""
    @click.option('--context', 'kubecontext', type=str, default=None,
                  help="The kubeconfig context to use instead of the current one.")
    @click.option('--request-timeout', type=float, default=None)
    @functools.wraps(fn)  # to preserve other opts/args
    def wrapper(kubecontext: Optional[str], request_timeout: Optional[float],
                *args: Any, **kwargs: Any) -> Any:
        try:
            info = login.login(context=kubecontext)
        except credentials.LoginError as e:
            raise click.ClickException(str(e))
        settings = configuration.AccessSettings()
        if request_timeout is not None:
            settings.networking.request_timeout = request_timeout
        try:
            return fn(*args, info=info, settings=settings, **kwargs)
        except (access_errors.AccessError, errors.APIError) as e:
            raise click.ClickException(str(e))

    return wrapper


output_option = click.option('-o', '--output', type=click.Choice(['yaml', 'json']), default='yaml')


@click.version_option(prog_name='kgeneric')
@click.group(name='kgeneric', context_settings=dict(
    auto_envvar_prefix='KGENERIC',
))
def main() -> None:
    pass


@main.command()
@logging_options
@connection_options
@output_option
@click.option('-n', '--namespace', type=str, default=None)
@click.option('--resource-version', type=str, default=None)
@click.argument('api_version')
@click.argument('kind')
@click.argument('name')
def get(
        api_version: str,
        kind: str,
        name: str,
        namespace: Optional[str],
        resource_version: Optional[str],
        output: str,
        info: credentials.ConnectionInfo,
        settings: configuration.AccessSettings,
) -> None:
    """ Read one object and print it. """
    obj = {
        'apiVersion': api_version,
        'kind': kind,
        'metadata': {'name': name, 'namespace': namespace or info.default_namespace},
    }
    opts: List[options.GetOption] = []
    if resource_version:
        opts.append(options.resource_version(resource_version))
    asyncio.run(_get(obj, *opts, info=info, settings=settings))
    click.echo(_render(obj, output=output))


@main.command(name='list')
@logging_options
@connection_options
@output_option
@click.option('-n', '--namespace', type=str, default=None)
@click.option('-l', '--selector', 'label_selector', type=str, default=None)
@click.option('--field-selector', type=str, default=None)
@click.option('--limit', type=int, default=None)
@click.option('--continue', 'continue_', type=str, default=None)
@click.argument('api_version')
@click.argument('kind')
def list_(
        api_version: str,
        kind: str,
        namespace: Optional[str],
        label_selector: Optional[str],
        field_selector: Optional[str],
        limit: Optional[int],
        continue_: Optional[str],
        output: str,
        info: credentials.ConnectionInfo,
        settings: configuration.AccessSettings,
) -> None:
    """ List the objects of a kind in a namespace, or in all namespaces if none is given. """
    objlist = {
        'apiVersion': api_version,
        'kind': kind if kind.endswith('List') else f'{kind}List',
    }
    opts: List[options.ListOption] = [
        options.with_list_options(dict(
            labelSelector=label_selector,
            fieldSelector=field_selector,
            limit=limit,
        ))
    ]
    if continue_:
        opts.append(options.continue_from(continue_))
    asyncio.run(_list(namespace, objlist, *opts, info=info, settings=settings))
    click.echo(_render(objlist, output=output))


@main.command()
@logging_options
@connection_options
@click.option('-g', '--group', 'groups', multiple=True,
              help="The API groups to scan (use '' for the core v1 group).")
def resources(
        groups: Collection[str],
        info: credentials.ConnectionInfo,
        settings: configuration.AccessSettings,
) -> None:
    """ Print the resources served by the cluster, as the discovery sees them. """
    found = asyncio.run(_scan(groups=groups or None, info=info, settings=settings))
    for resource in sorted(found, key=lambda r: (r.group, r.version, r.kind)):
        scope = 'namespaced' if resource.namespaced else 'cluster'
        click.echo(f"{resource.api_version}\t{resource.kind}\t{resource.plural}\t{scope}")


async def _get(
        obj: Any,
        *opts: options.GetOption,
        info: credentials.ConnectionInfo,
        settings: configuration.AccessSettings,
) -> None:
    async with operations.Client.from_connection(info, settings=settings) as client:
        await client.get(obj, *opts)


async def _list(
        namespace: references.Namespace,
        objlist: Any,
        *opts: options.ListOption,
        info: credentials.ConnectionInfo,
        settings: configuration.AccessSettings,
) -> None:
    async with operations.Client.from_connection(info, settings=settings) as client:
        await client.list(namespace, objlist, *opts)


async def _scan(
        *,
        groups: Optional[Collection[str]],
        info: credentials.ConnectionInfo,
        settings: configuration.AccessSettings,
) -> Collection[references.Resource]:
    context = auth.APIContext(info)
    try:
        return await scanning.scan_resources(
            groups=groups,
            context=context,
            settings=settings,
            logger=loggers.objects_logger,
        )
    finally:
        await context.close()


def _render(obj: Any, *, output: str) -> str:
    if output == 'json':
        return json.dumps(obj, indent=2)
    else:
        text: str = yaml.safe_dump(obj, sort_keys=False, default_flow_style=False)
        return text.rstrip('\n')
