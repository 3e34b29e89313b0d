import asyncio
from typing import Collection, Optional, Set

from kgeneric._cogs.clients import api, auth, errors
from kgeneric._cogs.configs import configuration
from kgeneric._cogs.helpers import typedefs
from kgeneric._cogs.structs import references


async def discover_resource(
        gvk: references.GroupVersionKind,
        *,
        context: auth.APIContext,
        settings: configuration.AccessSettings,
        logger: typedefs.Logger,
) -> Optional[references.Resource]:
    """
    Find the resource of a specific group/version/kind, if the cluster serves it.

    Only one group-version endpoint is requested, not the whole cluster:
    the group & version are known from the objects, only the plural name
    and the scope are unknown. The kind is matched case-sensitively.
    """
    url = f'/api/{gvk.version}' if gvk.group == '' else f'/apis/{gvk.group}/{gvk.version}'
    resources = await _read_version(
        url=url,
        group=gvk.group,
        version=gvk.version,
        context=context,
        settings=settings,
        logger=logger,
    )
    for resource in resources:
        if resource.kind == gvk.kind:
            return resource
    return None


async def scan_resources(
        *,
        context: auth.APIContext,
        settings: configuration.AccessSettings,
        logger: typedefs.Logger,
        groups: Optional[Collection[str]] = None,
) -> Collection[references.Resource]:
    coros = {
        _read_old_api(groups=groups, context=context, settings=settings, logger=logger),
        _read_new_apis(groups=groups, context=context, settings=settings, logger=logger),
    }
    resources: Set[references.Resource] = set()
    for coro in asyncio.as_completed(coros):
        resources.update(await coro)
    return resources


async def _read_old_api(
        *,
        context: auth.APIContext,
        settings: configuration.AccessSettings,
        logger: typedefs.Logger,
        groups: Optional[Collection[str]],
) -> Collection[references.Resource]:
    resources: Set[references.Resource] = set()
    if groups is None or '' in groups:
        rsp = await api.get('/api', context=context, settings=settings, logger=logger)
        coros = {
            _read_version(
                url=f'/api/{version_name}',
                group='',
                version=version_name,
                context=context,
                settings=settings,
                logger=logger,
            )
            for version_name in rsp['versions']
        }
        for coro in asyncio.as_completed(coros):
            resources.update(await coro)
    return resources


async def _read_new_apis(
        *,
        context: auth.APIContext,
        settings: configuration.AccessSettings,
        logger: typedefs.Logger,
        groups: Optional[Collection[str]],
) -> Collection[references.Resource]:
    resources: Set[references.Resource] = set()
    if groups is None or set(groups or {}) - {''}:
        rsp = await api.get('/apis', context=context, settings=settings, logger=logger)
        items = [d for d in rsp['groups'] if groups is None or d['name'] in groups]
        coros = {
            _read_version(
                url=f'/apis/{group_dat["name"]}/{version["version"]}',
                group=group_dat['name'],
                version=version['version'],
                context=context,
                settings=settings,
                logger=logger,
            )
            for group_dat in items
            for version in group_dat['versions']
        }
        for coro in asyncio.as_completed(coros):
            resources.update(await coro)
    return resources


async def _read_version(
        *,
        url: str,
        group: str,
        version: str,
        context: auth.APIContext,
        settings: configuration.AccessSettings,
        logger: typedefs.Logger,
) -> Collection[references.Resource]:
    try:
        rsp = await api.get(url, context=context, settings=settings, logger=logger)
    except errors.APINotFoundError:
        # This happens when the group/version does not exist at all in the cluster,
        # e.g. when the last and the only resource of a group/version has been deleted.
        return set()
    else:
        # Note: builtins' singulars are empty strings in K3s (reasons unknown):
        # fall back to the lowercased kind so that the names could match.
        return {
            references.Resource(
                group=group,
                version=version,
                kind=resource['kind'],
                plural=resource['name'],
                singular=resource.get('singularName') or resource['kind'].lower(),
                shortcuts=frozenset(resource.get('shortNames', [])),
                categories=frozenset(resource.get('categories', [])),
                subresources=frozenset(
                    subresource['name'].split('/', 1)[-1]
                    for subresource in rsp.get('resources', [])
                    if subresource['name'].startswith(f'{resource["name"]}/')
                ),
                namespaced=resource['namespaced'],
                verbs=frozenset(resource.get('verbs') or []),
            )
            for resource in rsp.get('resources', [])
            if '/' not in resource['name']
        }
