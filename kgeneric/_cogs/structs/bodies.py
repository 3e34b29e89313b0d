"""
All the structures coming from the Kubernetes API.

Everything marked "raw" is plain unwrapped unprocessed data as JSON-decoded
from the Kubernetes API, as retrieved by the fetching calls. These are
the "generic response trees" that the converters turn into typed objects.

For strict type-checking, they are detailed to the per-field level
(e.g. `TypedDict` instead of just ``Mapping[Any, Any]``) -- as used
by the library itself. The actual payloads can contain arbitrary fields
at runtime, which are not declared in the type definitions.
"""
from typing import Any, List, Mapping

from typing_extensions import TypedDict

Labels = Mapping[str, str]
Annotations = Mapping[str, str]


class RawMeta(TypedDict, total=False):
    uid: str
    name: str
    namespace: str
    labels: Labels
    annotations: Annotations
    finalizers: List[str]
    resourceVersion: str
    generation: int
    deletionTimestamp: str
    creationTimestamp: str


class RawBody(TypedDict, total=False):
    apiVersion: str
    kind: str
    metadata: RawMeta
    spec: Mapping[str, Any]
    status: Mapping[str, Any]


# The functional syntax is needed for "continue", which is a keyword in Python.
RawListMeta = TypedDict('RawListMeta', {
    'resourceVersion': str,
    'remainingItemCount': int,
    'continue': str,
}, total=False)


class RawList(TypedDict, total=False):
    apiVersion: str
    kind: str
    metadata: RawListMeta
    items: List[RawBody]
