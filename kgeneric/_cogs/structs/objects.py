"""
Base classes for the typed representations of the Kubernetes objects.

The library has no generated classes for every kind in the cluster.
Instead, the users declare only the kinds they need (and only the fields
they need) as dataclasses derived from :class:`Object` and :class:`ObjectList`,
and the converters fill them from the generic JSON trees field-by-field::

    @dataclasses.dataclass
    class DeploymentSpec:
        replicas: int = 1

    @dataclasses.dataclass
    class Deployment(kgeneric.Object):
        api_version: str = 'apps/v1'
        kind: str = 'Deployment'
        spec: DeploymentSpec = dataclasses.field(default_factory=DeploymentSpec)

    @dataclasses.dataclass
    class DeploymentList(kgeneric.ObjectList):
        api_version: str = 'apps/v1'
        kind: str = 'DeploymentList'
        items: List[Deployment] = dataclasses.field(default_factory=list)

The Python field names are snake-cased; the JSON names are camel-cased
as per the API conventions. Where the conventions do not fit (e.g. ``podIP``),
the JSON name is given explicitly: ``dataclasses.field(metadata={'name': 'podIP'})``.
"""
import dataclasses
import datetime
from typing import Any, Dict, List, Optional


@dataclasses.dataclass
class OwnerReference:
    api_version: str = ''
    kind: str = ''
    name: str = ''
    uid: str = ''
    controller: Optional[bool] = None
    block_owner_deletion: Optional[bool] = None


@dataclasses.dataclass
class ObjectMeta:
    name: str = ''
    namespace: str = ''
    uid: str = ''
    resource_version: str = ''
    generation: Optional[int] = None
    creation_timestamp: Optional[datetime.datetime] = None
    deletion_timestamp: Optional[datetime.datetime] = None
    labels: Dict[str, str] = dataclasses.field(default_factory=dict)
    annotations: Dict[str, str] = dataclasses.field(default_factory=dict)
    finalizers: List[str] = dataclasses.field(default_factory=list)
    owner_references: List[OwnerReference] = dataclasses.field(default_factory=list)


@dataclasses.dataclass
class ListMeta:
    resource_version: str = ''
    continue_: str = ''
    remaining_item_count: Optional[int] = None


@dataclasses.dataclass
class Object:
    """
    A typed individual object: the minimum required to address it in the API.
    """
    api_version: str = ''
    kind: str = ''
    metadata: ObjectMeta = dataclasses.field(default_factory=ObjectMeta)

    @property
    def namespace(self) -> Optional[str]:
        return self.metadata.namespace or None

    @property
    def name(self) -> Optional[str]:
        return self.metadata.name or None


@dataclasses.dataclass
class ObjectList:
    """
    A typed list of objects. The descendants narrow the type of ``items``.

    The kind of a list is the kind of its items with the ``List`` suffix,
    e.g. ``DeploymentList`` for ``Deployment`` items.
    """
    api_version: str = ''
    kind: str = ''
    metadata: ListMeta = dataclasses.field(default_factory=ListMeta)
    items: List[Any] = dataclasses.field(default_factory=list)
