from typing import Mapping, Optional

from kgeneric._cogs.clients import api, auth
from kgeneric._cogs.configs import configuration
from kgeneric._cogs.helpers import typedefs
from kgeneric._cogs.structs import bodies, references


async def read_obj(
        *,
        resource: references.Resource,
        namespace: references.Namespace,
        name: str,
        params: Optional[Mapping[str, str]] = None,
        context: auth.APIContext,
        settings: configuration.AccessSettings,
        logger: typedefs.Logger,
) -> bodies.RawBody:
    """
    Read an individual object by its name, as a raw JSON tree.

    All API errors are escalated, including HTTP 404 for absent objects:
    it is the caller's decision whether absence is an error or not.
    """
    rsp: bodies.RawBody = await api.get(
        url=resource.get_url(namespace=namespace, name=name, params=params),
        context=context,
        settings=settings,
        logger=logger,
    )
    return rsp


async def list_objs(
        *,
        resource: references.Resource,
        namespace: references.Namespace,
        params: Optional[Mapping[str, str]] = None,
        context: auth.APIContext,
        settings: configuration.AccessSettings,
        logger: typedefs.Logger,
) -> bodies.RawList:
    """
    List the objects of specific resource type, as a raw JSON tree.

    The cluster-scoped call is used in two cases:

    * The resource itself is cluster-scoped, and namespacing makes not sense.
    * The resource is namespaced, but all namespaces are listed at once.

    Otherwise, the namespace-scoped call is used.
    """
    rsp: bodies.RawList = await api.get(
        url=resource.get_url(namespace=namespace, params=params),
        context=context,
        settings=settings,
        logger=logger,
    )

    return rsp
