"""
Resolution of the group/version/kind triples into the resource clients.

A resource client is a capability to read the objects of one resource type:
it knows the resource's REST path & scope (from the discovery) and the
transport to make the requests with. The clients are resolved lazily,
on the first use of every triple, and are cached for all later calls.

Both the discovery and the transport are pluggable protocols. The default ones
(:class:`APIDiscovery` and :class:`APITransport`) talk to the API server
via a shared :class:`kgeneric._cogs.clients.auth.APIContext`.
"""
import dataclasses
import logging
from typing import Any, Dict, Optional, Union

from typing_extensions import Protocol

from kgeneric._cogs.clients import auth, fetching, scanning
from kgeneric._cogs.configs import configuration
from kgeneric._cogs.helpers import typedefs
from kgeneric._cogs.structs import references
from kgeneric._core.access import errors
from kgeneric._core.access import options as opts

default_logger = logging.getLogger(__name__)


class Discovery(Protocol):
    async def discover(
            self,
            gvk: references.GroupVersionKind,
    ) -> Optional[references.Resource]: ...


class Transport(Protocol):
    async def fetch(
            self,
            resource: references.Resource,
            *,
            namespace: references.Namespace,
            name: Optional[str],
            options: Union[opts.GetOptions, opts.ListOptions],
    ) -> Any: ...


class APIDiscovery:
    """ Discover the resources via the API server's discovery endpoints. """

    def __init__(
            self,
            *,
            context: auth.APIContext,
            settings: configuration.AccessSettings,
            logger: Optional[typedefs.Logger] = None,
    ) -> None:
        super().__init__()
        self.context = context
        self.settings = settings
        self.logger = logger if logger is not None else default_logger

    async def discover(
            self,
            gvk: references.GroupVersionKind,
    ) -> Optional[references.Resource]:
        return await scanning.discover_resource(
            gvk,
            context=self.context,
            settings=self.settings,
            logger=self.logger,
        )


class APITransport:
    """
    Read the objects or the lists of objects via the API server.

    Individual objects are read if the name is given, lists otherwise.
    """

    def __init__(
            self,
            *,
            context: auth.APIContext,
            settings: configuration.AccessSettings,
            logger: Optional[typedefs.Logger] = None,
    ) -> None:
        super().__init__()
        self.context = context
        self.settings = settings
        self.logger = logger if logger is not None else default_logger

    async def fetch(
            self,
            resource: references.Resource,
            *,
            namespace: references.Namespace,
            name: Optional[str],
            options: Union[opts.GetOptions, opts.ListOptions],
    ) -> Any:
        if name is None:
            return await fetching.list_objs(
                resource=resource,
                namespace=namespace,
                params=options.as_params(),
                context=self.context,
                settings=self.settings,
                logger=self.logger,
            )
        else:
            return await fetching.read_obj(
                resource=resource,
                namespace=namespace,
                name=name,
                params=options.as_params(),
                context=self.context,
                settings=self.settings,
                logger=self.logger,
            )


@dataclasses.dataclass(frozen=True)
class ResourceClient:
    """
    A capability to read the objects of one discovered resource.

    The namespace is passed as is: the scope checks are the caller's duty.
    """
    resource: references.Resource
    transport: Transport

    @property
    def namespaced(self) -> bool:
        return self.resource.namespaced

    async def get(
            self,
            *,
            namespace: references.Namespace,
            name: str,
            options: opts.GetOptions,
    ) -> Any:
        return await self.transport.fetch(self.resource, namespace=namespace, name=name, options=options)

    async def list(
            self,
            *,
            namespace: references.Namespace,
            options: opts.ListOptions,
    ) -> Any:
        return await self.transport.fetch(self.resource, namespace=namespace, name=None, options=options)


class ResolverCache(Dict[references.GroupVersionKind, ResourceClient]):
    """
    The resolved resource clients, keyed by their group/version/kind.

    It is a plain dict mutated only between the awaits of the event loop,
    so it needs no locks. Pass a new instance to every resolver in tests.
    """


class Resolver:
    """
    Resolve the group/version/kind triples into the resource clients.

    The discovery is done only on the first use of every triple (on a miss).
    The concurrent misses of the same triple are not merged: all of them
    perform the discovery, and the last one stays in the cache. No locks are
    held over the remote calls.

    The cache is never invalidated implicitly, even if the reads fail
    afterwards: use :meth:`invalidate` when the cluster's resources change,
    or disable caching in the settings (``settings.discovery.caching``).
    """

    def __init__(
            self,
            *,
            discovery: Discovery,
            transport: Transport,
            cache: Optional[ResolverCache] = None,
            settings: Optional[configuration.AccessSettings] = None,
    ) -> None:
        super().__init__()
        self.discovery = discovery
        self.transport = transport
        self.cache = cache if cache is not None else ResolverCache()
        self.settings = settings if settings is not None else configuration.AccessSettings()

    async def resolve(
            self,
            gvk: references.GroupVersionKind,
            *,
            logger: Optional[typedefs.Logger] = None,
    ) -> ResourceClient:
        logger = logger if logger is not None else default_logger
        caching = self.settings.discovery.caching
        if caching and gvk in self.cache:
            return self.cache[gvk]

        logger.debug(f"Discovering the resource for {gvk}.")
        resource = await self.discovery.discover(gvk)
        if resource is None:
            raise errors.UnknownResourceError(gvk)

        client = ResourceClient(resource=resource, transport=self.transport)
        if caching:
            self.cache[gvk] = client
        logger.debug(f"Resolved {gvk} as {resource}.")
        return client

    def invalidate(self, gvk: Optional[references.GroupVersionKind] = None) -> None:
        """ Forget one resolved triple, or all of them if none is specified. """
        if gvk is None:
            self.cache.clear()
        else:
            self.cache.pop(gvk, None)
