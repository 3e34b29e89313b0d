"""
The Get/List operations: the public entry points of the access layer.

Every call is a single pass: extract the group/version/kind (and the address)
from the destination, resolve the resource client, read the raw object(s)
from the server, and convert them into the destination in place.
Nothing is retried on this level, and nothing is remembered between the calls
except the resolved resource clients. On failures, the destination is left
untouched if the failure happens before the conversion, and is undefined
if the conversion itself fails.

Usage::

    async with kgeneric.Client.from_connection(kgeneric.login()) as client:
        deployment = Deployment(metadata=kgeneric.ObjectMeta(namespace='default', name='web'))
        await client.get(deployment)

        deployments = DeploymentList()
        await client.list('default', deployments, kgeneric.label_selector('app=web'))
"""
import asyncio
import contextlib
from typing import Any, Iterator, Optional, Type

import aiohttp

from kgeneric._cogs.clients import auth, errors as api_errors
from kgeneric._cogs.configs import configuration
from kgeneric._cogs.helpers import loggers, typedefs
from kgeneric._cogs.structs import credentials, references
from kgeneric._core.access import converting, descriptors, errors, options, resolving


class Client:
    """
    A generic reading client for any resources served by the cluster.

    The client is not bound to any specific resource type: the type is taken
    from every destination object passed to :meth:`get` or :meth:`list`.
    """

    def __init__(
            self,
            *,
            resolver: resolving.Resolver,
            context: Optional[auth.APIContext] = None,
            logger: Optional[typedefs.Logger] = None,
    ) -> None:
        super().__init__()
        self.resolver = resolver
        self.context = context
        self.logger = logger

    @classmethod
    def from_connection(
            cls,
            info: credentials.ConnectionInfo,
            *,
            settings: Optional[configuration.AccessSettings] = None,
            cache: Optional[resolving.ResolverCache] = None,
    ) -> "Client":
        """
        Build a client with the default discovery & transport via the API server.

        The client owns the HTTP session and must be closed after use,
        either explicitly with :meth:`close` or as an async context manager.
        """
        settings = settings if settings is not None else configuration.AccessSettings()
        context = auth.APIContext(info)
        resolver = resolving.Resolver(
            discovery=resolving.APIDiscovery(context=context, settings=settings),
            transport=resolving.APITransport(context=context, settings=settings),
            cache=cache,
            settings=settings,
        )
        return cls(resolver=resolver, context=context)

    async def close(self) -> None:
        if self.context is not None:
            await self.context.close()

    async def __aenter__(self) -> "Client":
        return self

    async def __aexit__(
            self,
            exc_type: Optional[Type[BaseException]],
            exc_val: Optional[BaseException],
            exc_tb: Any,
    ) -> None:
        await self.close()

    async def get(
            self,
            dest: Any,
            *opts: options.GetOption,
    ) -> None:
        """
        Read one object into the destination, as addressed by the destination.

        The destination must declare its API version, kind, and name.
        The namespace is required for the namespaced resources, and is ignored
        for the cluster-scoped ones.
        """
        descriptors.ensure_fillable(dest)
        gvk = descriptors.extract_gvk(dest)
        address = descriptors.extract_address(dest)
        get_options = options.apply_get_options(*opts)
        obj_logger = loggers.ObjectLogger(gvk=gvk, address=address, logger=self.logger)

        with _tagged(gvk, address):
            client = await self.resolver.resolve(gvk, logger=obj_logger)
        if client.namespaced and address.namespace is None:
            raise errors.MissingNamespaceError(
                f"A namespace is required to get the namespaced {gvk}: {address}",
                resource=client.resource)
        namespace = address.namespace if client.namespaced else None

        obj_logger.debug(f"Reading the object from {client.resource}.")
        with _tagged(gvk, address):
            raw = await client.get(namespace=namespace, name=address.name, options=get_options)

        converting.into_typed(raw, dest)
        obj_logger.debug("Read the object successfully.")

    async def list(
            self,
            namespace: references.Namespace,
            dest: Any,
            *opts: options.ListOption,
    ) -> None:
        """
        Read the objects into the destination list, as typed by the destination.

        For the namespaced resources, an empty or ``None`` namespace means
        all namespaces. For the cluster-scoped resources, the namespace must be
        ``None``: any other value, including an empty string, is an error,
        not a silently empty list.
        """
        descriptors.ensure_fillable(dest)
        gvk = descriptors.extract_list_gvk(dest)
        list_options = options.apply_list_options(*opts)
        address = references.ObjectAddress(namespace=namespace or None, name=None)
        obj_logger = loggers.ObjectLogger(gvk=gvk, address=address, logger=self.logger)

        with _tagged(gvk, address):
            client = await self.resolver.resolve(gvk, logger=obj_logger)
        if not client.namespaced and namespace is not None:
            raise errors.ScopeMismatchError(
                f"The cluster-scoped {gvk} cannot be listed in a namespace: {namespace!r}",
                resource=client.resource)

        obj_logger.debug(f"Listing the objects from {client.resource}.")
        with _tagged(gvk, address):
            raw = await client.list(namespace=namespace or None, options=list_options)

        converting.into_typed_list(raw, dest)
        obj_logger.debug("Listed the objects successfully.")


@contextlib.contextmanager
def _tagged(
        gvk: references.GroupVersionKind,
        address: references.ObjectAddress,
) -> Iterator[None]:
    """
    Tag the remote failures with the identity of the requested object(s).

    Both the API errors and the low-level network errors & timeouts are tagged,
    from the discovery and from the reading alike. They are re-raised as is.
    """
    try:
        yield
    except (api_errors.APIError, aiohttp.ClientError, asyncio.TimeoutError) as e:
        setattr(e, 'gvk', gvk)
        setattr(e, 'address', address)
        raise
