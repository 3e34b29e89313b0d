import asyncio

import pytest

from kgeneric._cogs.structs.references import GroupVersionKind
from kgeneric._core.access.errors import UnknownResourceError
from kgeneric._core.access.resolving import Resolver, ResolverCache, ResourceClient

from .conftest import CLUSTER_WIDGET, WIDGET, CountingDiscovery


async def test_first_resolution_discovers(resolver, discovery, transport, namespaced_resource):
    client = await resolver.resolve(WIDGET)
    assert isinstance(client, ResourceClient)
    assert client.resource == namespaced_resource
    assert client.transport is transport
    assert client.namespaced is True
    assert discovery.calls == [WIDGET]


async def test_repeated_resolutions_are_cached(resolver, discovery, cache):
    client1 = await resolver.resolve(WIDGET)
    client2 = await resolver.resolve(WIDGET)
    assert client1 is client2
    assert discovery.calls == [WIDGET]
    assert cache == {WIDGET: client1}


async def test_triples_are_cached_separately(resolver, discovery, cache):
    client1 = await resolver.resolve(WIDGET)
    client2 = await resolver.resolve(CLUSTER_WIDGET)
    await resolver.resolve(WIDGET)
    await resolver.resolve(CLUSTER_WIDGET)
    assert client1.resource != client2.resource
    assert discovery.calls == [WIDGET, CLUSTER_WIDGET]
    assert set(cache) == {WIDGET, CLUSTER_WIDGET}


async def test_unknown_triples_fail_and_are_not_cached(resolver, discovery, cache):
    gvk = GroupVersionKind('example.com', 'v1', 'Gadget')
    with pytest.raises(UnknownResourceError) as err:
        await resolver.resolve(gvk)
    with pytest.raises(UnknownResourceError):
        await resolver.resolve(gvk)
    assert err.value.gvk == gvk
    assert discovery.calls == [gvk, gvk]
    assert cache == {}


async def test_discovery_errors_escalate_and_are_not_cached(resolver, discovery, cache, mocker):
    mocker.patch.object(discovery, 'discover', side_effect=RuntimeError('boo'))
    with pytest.raises(RuntimeError, match='boo'):
        await resolver.resolve(WIDGET)
    assert cache == {}


async def test_caching_can_be_disabled(resolver, discovery, cache, settings):
    settings.discovery.caching = False
    await resolver.resolve(WIDGET)
    await resolver.resolve(WIDGET)
    assert discovery.calls == [WIDGET, WIDGET]
    assert cache == {}


async def test_invalidation_of_one_triple(resolver, discovery):
    await resolver.resolve(WIDGET)
    await resolver.resolve(CLUSTER_WIDGET)
    resolver.invalidate(WIDGET)
    await resolver.resolve(WIDGET)
    await resolver.resolve(CLUSTER_WIDGET)
    assert discovery.calls == [WIDGET, CLUSTER_WIDGET, WIDGET]


async def test_invalidation_of_all_triples(resolver, discovery, cache):
    await resolver.resolve(WIDGET)
    await resolver.resolve(CLUSTER_WIDGET)
    resolver.invalidate()
    assert cache == {}
    resolver.invalidate()  # no errors when empty
    resolver.invalidate(WIDGET)  # no errors when absent


async def test_injected_caches_are_shared_and_preset(discovery, transport, namespaced_resource):
    preset = ResourceClient(resource=namespaced_resource, transport=transport)
    cache = ResolverCache({WIDGET: preset})
    resolver1 = Resolver(discovery=discovery, transport=transport, cache=cache)
    resolver2 = Resolver(discovery=discovery, transport=transport, cache=cache)
    assert await resolver1.resolve(WIDGET) is preset
    assert await resolver2.resolve(WIDGET) is preset
    assert discovery.calls == []


async def test_fresh_caches_by_default(discovery, transport):
    resolver1 = Resolver(discovery=discovery, transport=transport)
    resolver2 = Resolver(discovery=discovery, transport=transport)
    await resolver1.resolve(WIDGET)
    await resolver2.resolve(WIDGET)
    assert resolver1.cache is not resolver2.cache
    assert discovery.calls == [WIDGET, WIDGET]


async def test_concurrent_misses_are_all_discovered_and_last_one_wins(
        transport, namespaced_resource):

    class SlowDiscovery(CountingDiscovery):
        async def discover(self, gvk):
            await asyncio.sleep(0)
            return await super().discover(gvk)

    discovery = SlowDiscovery({WIDGET: namespaced_resource})
    resolver = Resolver(discovery=discovery, transport=transport)
    clients = await asyncio.gather(*[resolver.resolve(WIDGET) for _ in range(3)])
    assert discovery.calls == [WIDGET, WIDGET, WIDGET]
    assert resolver.cache[WIDGET] in clients
    assert all(client.resource == namespaced_resource for client in clients)


async def test_resolution_is_logged(resolver, assert_logs):
    await resolver.resolve(WIDGET)
    await resolver.resolve(WIDGET)
    assert_logs([
        r"Discovering the resource for Widget.v1.example.com",
        r"Resolved Widget.v1.example.com as",
    ])
