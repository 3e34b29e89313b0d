import copy
import dataclasses
from typing import Dict, List, Optional

import pytest

from kgeneric._cogs.structs.objects import Object, ObjectList, ObjectMeta
from kgeneric._cogs.structs.references import GroupVersionKind, Resource
from kgeneric._core.access.operations import Client
from kgeneric._core.access.resolving import Resolver, ResolverCache


@dataclasses.dataclass
class WidgetSpec:
    size: int = 0
    color: str = ''
    tags: List[str] = dataclasses.field(default_factory=list)


@dataclasses.dataclass
class Widget(Object):
    api_version: str = 'example.com/v1'
    kind: str = 'Widget'
    spec: WidgetSpec = dataclasses.field(default_factory=WidgetSpec)


@dataclasses.dataclass
class WidgetList(ObjectList):
    api_version: str = 'example.com/v1'
    kind: str = 'WidgetList'
    items: List[Widget] = dataclasses.field(default_factory=list)


@dataclasses.dataclass
class ClusterWidget(Object):
    api_version: str = 'example.com/v1'
    kind: str = 'ClusterWidget'
    spec: WidgetSpec = dataclasses.field(default_factory=WidgetSpec)


@dataclasses.dataclass
class ClusterWidgetList(ObjectList):
    api_version: str = 'example.com/v1'
    kind: str = 'ClusterWidgetList'
    items: List[ClusterWidget] = dataclasses.field(default_factory=list)


WIDGET = GroupVersionKind('example.com', 'v1', 'Widget')
CLUSTER_WIDGET = GroupVersionKind('example.com', 'v1', 'ClusterWidget')


class CountingDiscovery:
    """ A fake discovery that knows a fixed set of resources and counts the calls. """

    def __init__(self, resources: Dict[GroupVersionKind, Resource]) -> None:
        super().__init__()
        self.resources = resources
        self.calls: List[GroupVersionKind] = []

    async def discover(self, gvk):
        self.calls.append(gvk)
        return self.resources.get(gvk)


@dataclasses.dataclass(frozen=True)
class FetchRequest:
    resource: Resource
    namespace: Optional[str]
    name: Optional[str]
    options: object


class RecordingTransport:
    """ A fake transport that returns the pre-set response and records the requests. """

    def __init__(self) -> None:
        super().__init__()
        self.response = {}
        self.requests: List[FetchRequest] = []

    async def fetch(self, resource, *, namespace, name, options):
        self.requests.append(FetchRequest(resource, namespace, name, copy.deepcopy(options)))
        if isinstance(self.response, BaseException):
            raise self.response
        return copy.deepcopy(self.response)


@pytest.fixture()
def discovery(namespaced_resource, cluster_resource):
    return CountingDiscovery({
        WIDGET: namespaced_resource,
        CLUSTER_WIDGET: cluster_resource,
    })


@pytest.fixture()
def transport():
    return RecordingTransport()


@pytest.fixture()
def cache():
    return ResolverCache()


@pytest.fixture()
def resolver(discovery, transport, cache, settings):
    return Resolver(discovery=discovery, transport=transport, cache=cache, settings=settings)


@pytest.fixture()
def client(resolver, logger):
    return Client(resolver=resolver, logger=logger)


@pytest.fixture()
def widget():
    return Widget(metadata=ObjectMeta(namespace='ns1', name='w1'))


@pytest.fixture()
def widget_tree():
    return {
        'apiVersion': 'example.com/v1',
        'kind': 'Widget',
        'metadata': {
            'namespace': 'ns1',
            'name': 'w1',
            'uid': 'uid1',
            'resourceVersion': '42',
            'creationTimestamp': '2024-01-01T00:00:00Z',
            'labels': {'app': 'x'},
        },
        'spec': {'size': 3, 'color': 'red', 'tags': ['a', 'b']},
        'status': {'ignored': True},
    }


class PlainWidget:
    """ Identifiable and addressable, but not fillable: neither a dataclass nor a mapping. """
    api_version = 'example.com/v1'
    kind = 'Widget'
    namespace = 'ns1'
    name = 'w1'


class PlainWidgetList:
    api_version = 'example.com/v1'
    kind = 'WidgetList'
