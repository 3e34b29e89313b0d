"""
Extraction of the identifying triple and the address from the objects.

Two kinds of objects are supported:

* Typed objects, which expose the :class:`Descriptor` protocol:
  ``api_version``, ``kind``, ``namespace``, ``name`` (see :class:`Object`).
* Unstructured mappings in the API's own shape:
  ``{"apiVersion": ..., "kind": ..., "metadata": {"namespace": ..., "name": ...}}``.

The object's own declaration is the only source of the triple: nothing is
guessed from the context or remembered from the previous calls.
"""
import collections.abc
import dataclasses
import typing
from typing import Any, Dict, Mapping, Optional, Union

from typing_extensions import Protocol, runtime_checkable

from kgeneric._cogs.structs import references
from kgeneric._core.access import errors


@runtime_checkable
class Descriptor(Protocol):
    """
    The minimal interface of typed objects to be identified and addressed.
    """

    @property
    def api_version(self) -> str: ...

    @property
    def kind(self) -> str: ...

    @property
    def namespace(self) -> Optional[str]: ...

    @property
    def name(self) -> Optional[str]: ...


def ensure_fillable(obj: Any) -> None:
    """
    Fail early for the destinations that the converters cannot fill in place.

    Only dataclass instances and mutable mappings are filled. Other objects
    can still expose the :class:`Descriptor` protocol (e.g. for logging),
    but nothing can be read into them.
    """
    if isinstance(obj, collections.abc.MutableMapping):
        return
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return
    raise errors.UnsupportedObjectError(
        f"The object cannot be filled, it must be a dataclass or a mutable mapping: {obj!r}")


def extract_gvk(obj: Union[Descriptor, Mapping[str, Any]]) -> references.GroupVersionKind:
    """
    Get the group/version/kind triple as declared by the object.
    """
    if isinstance(obj, collections.abc.Mapping):
        api_version = obj.get('apiVersion')
        kind = obj.get('kind')
    else:
        api_version = getattr(obj, 'api_version', None)
        kind = getattr(obj, 'kind', None)
    return _make_gvk(obj, api_version=api_version, kind=kind)


def extract_address(obj: Union[Descriptor, Mapping[str, Any]]) -> references.ObjectAddress:
    """
    Get the namespace & name of an individual object.

    The namespace can be absent: whether it is fine or not depends
    on the resource's scope, which is not known until the discovery.
    """
    if isinstance(obj, collections.abc.Mapping):
        metadata = obj.get('metadata') or {}
        namespace = metadata.get('namespace')
        name = metadata.get('name')
    else:
        namespace = getattr(obj, 'namespace', None)
        name = getattr(obj, 'name', None)
    if not name:
        raise errors.MissingNameError(f"The object has no name: {obj!r}")
    return references.ObjectAddress(
        namespace=references.NamespaceName(namespace) if namespace else None,
        name=name,
    )


def extract_list_gvk(objlist: Any) -> references.GroupVersionKind:
    """
    Get the group/version/kind triple of the items of a list object.

    The list's kind is the items' kind with the "List" suffix. If the list
    declares no kind or version at all, the item type's defaults are used
    (only for typed lists with the narrowed type of ``items``).
    """
    if isinstance(objlist, collections.abc.Mapping):
        api_version = objlist.get('apiVersion')
        kind = objlist.get('kind')
    else:
        api_version = getattr(objlist, 'api_version', None)
        kind = getattr(objlist, 'kind', None)
        if not kind or not api_version:
            item_defaults = _get_item_defaults(type(objlist))
            api_version = api_version or item_defaults.get('api_version')
            kind = kind or item_defaults.get('kind')

    if kind and kind.endswith('List'):
        kind = kind[:-4]
    return _make_gvk(objlist, api_version=api_version, kind=kind)


def _make_gvk(obj: Any, *, api_version: Optional[str], kind: Optional[str]) -> references.GroupVersionKind:
    if not kind:
        raise errors.MissingKindError(f"The object has no kind: {obj!r}")
    if not api_version:
        raise errors.MissingVersionError(f"The object has no API version: {obj!r}")
    gvk = references.GroupVersionKind.from_api_version(api_version, kind)
    if not gvk.version:
        raise errors.MissingVersionError(f"The object has no API version: {obj!r}")
    return gvk


def _get_item_defaults(cls: type) -> Dict[str, Any]:
    """ Get the default ``api_version`` & ``kind`` of the declared type of ``items``. """
    if not dataclasses.is_dataclass(cls):
        return {}
    hints = typing.get_type_hints(cls)
    args = typing.get_args(hints.get('items'))
    item_cls = args[0] if len(args) == 1 else None
    if item_cls is None or not dataclasses.is_dataclass(item_cls):
        return {}
    return {
        field.name: field.default
        for field in dataclasses.fields(item_cls)
        if field.name in {'api_version', 'kind'}
        if field.default is not dataclasses.MISSING
    }
