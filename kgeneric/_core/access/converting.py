"""
Conversion of the generic JSON trees into the typed objects and back.

The conversion is directed by the destination's dataclass fields and their
type hints. Every field present in the tree is coerced into the field's type;
unknown fields of the tree are ignored; the fields absent in the tree are reset
to their declared defaults. Nested dataclasses are constructed recursively.

The JSON names are camel-cased as per the API conventions (``api_version`` is
``apiVersion``; a trailing underscore is dropped, so ``continue_`` is ``continue``).
An explicit name can be declared with ``dataclasses.field(metadata={'name': ...})``.

Unstructured destinations (mutable mappings) get a deep copy of the tree.
"""
import collections.abc
import copy
import dataclasses
import datetime
import enum
import functools
import types
import typing
from typing import Any, Dict, List, Mapping, Union

import iso8601

from kgeneric._cogs.helpers import typedefs
from kgeneric._core.access import errors

_MISSING = object()

_SEQUENCE_ORIGINS = {
    list,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Collection,
    collections.abc.Iterable,
}
_MAPPING_ORIGINS = {
    dict,
    collections.abc.Mapping,
    collections.abc.MutableMapping,
}


def into_typed(tree: Mapping[str, Any], dest: Any) -> None:
    """
    Fill the destination object in place with the values from the tree.
    """
    if not isinstance(tree, collections.abc.Mapping):
        raise errors.ConversionError(f"Expected an object, got {type(tree).__name__}.")
    if isinstance(dest, collections.abc.MutableMapping):
        dest.clear()
        dest.update(copy.deepcopy(dict(tree)))
    elif dataclasses.is_dataclass(dest) and not isinstance(dest, type):
        _fill(dest, tree, path='')
    else:
        raise TypeError(f"Unsupported destination type: {type(dest).__name__}")


def into_typed_list(tree: Mapping[str, Any], dest: Any) -> None:
    """
    Fill the destination list object in place with the values from the tree.

    The items keep the order of the response, and their number is the same.
    The items usually have no ``apiVersion`` & ``kind`` in the list responses:
    the API declares them only once for the whole list. They are restored
    in the items from the list's ``apiVersion`` and ``kind`` (without "List").
    """
    if not isinstance(tree, collections.abc.Mapping):
        raise errors.ConversionError(f"Expected an object, got {type(tree).__name__}.")
    items = tree.get('items') or []
    if not isinstance(items, list):
        raise errors.ConversionError(f"Expected a list, got {type(items).__name__}.", path='items')

    list_kind = tree.get('kind')
    item_kind = list_kind[:-4] if list_kind and list_kind.endswith('List') else list_kind
    api_version = tree.get('apiVersion')
    restored: List[Any] = []
    for item in items:
        if isinstance(item, collections.abc.Mapping):
            item = dict(item)
            if item_kind:
                item.setdefault('kind', item_kind)
            if api_version:
                item.setdefault('apiVersion', api_version)
        restored.append(item)

    into_typed(dict(tree, items=restored), dest)


def from_typed(obj: Any) -> Dict[str, Any]:
    """
    Render a typed object into the generic tree, as the API would serve it.

    Empty values (``None``, empty strings, lists, dicts, and nested objects
    with only the empty values) are omitted, unless the field is declared
    with ``metadata={'omitempty': False}``. Numbers & booleans are kept.

    The typed objects do not remember which fields were present in the tree.
    So, the explicitly empty collections of the responses (e.g. ``tags: []``)
    are rendered as absent, same as the never-set ones. Declare such fields
    with ``omitempty: False`` if their emptiness matters for round-trips.
    """
    if isinstance(obj, collections.abc.Mapping):
        return copy.deepcopy(dict(obj))
    elif dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        tree: Dict[str, Any] = _dump(obj)
        return tree
    else:
        raise TypeError(f"Unsupported object type: {type(obj).__name__}")


def get_json_name(field: dataclasses.Field) -> str:  # type: ignore[type-arg]
    explicit: str = field.metadata.get('name', '')
    if explicit:
        return explicit
    head, *tail = field.name.rstrip('_').split('_')
    return head + ''.join(part[:1].upper() + part[1:] for part in tail)


@functools.lru_cache(maxsize=None)
def _get_hints(cls: type) -> Dict[str, Any]:
    return typing.get_type_hints(cls)


def _get_default(field: dataclasses.Field) -> Any:  # type: ignore[type-arg]
    if field.default is not dataclasses.MISSING:
        return field.default
    elif field.default_factory is not dataclasses.MISSING:
        return field.default_factory()
    else:
        return _MISSING


def _fill(obj: Any, tree: Mapping[str, Any], *, path: str) -> None:
    hints = _get_hints(type(obj))
    for field in dataclasses.fields(obj):
        key = get_json_name(field)
        if key in tree:
            value = _coerce(tree[key], hints[field.name], path=_join(path, key))
        else:
            value = _get_default(field)
        if value is not _MISSING:
            setattr(obj, field.name, value)


def _construct(cls: type, tree: Any, *, path: str) -> Any:
    if not isinstance(tree, collections.abc.Mapping):
        raise errors.ConversionError(f"Expected an object, got {type(tree).__name__}.", path=path)
    hints = _get_hints(cls)
    kwargs: Dict[str, Any] = {}
    for field in dataclasses.fields(cls):
        key = get_json_name(field)
        if field.init and key in tree:
            kwargs[field.name] = _coerce(tree[key], hints[field.name], path=_join(path, key))
    try:
        return cls(**kwargs)
    except TypeError as e:
        raise errors.ConversionError(f"Cannot construct {cls.__name__}: {e}", path=path) from e


def _coerce(value: Any, hint: Any, *, path: str) -> Any:
    origin = typing.get_origin(hint)
    args = typing.get_args(hint)

    if hint is Any or hint is object:
        return copy.deepcopy(value)

    if origin is Union or origin is types.UnionType:
        if value is None and type(None) in args:
            return None
        for arg in args:
            if arg is not type(None):
                try:
                    return _coerce(value, arg, path=path)
                except errors.ConversionError:
                    pass
        raise errors.ConversionError(f"{value!r} does not match {hint}.", path=path)

    if origin is typing.Literal:
        if value in args:
            return value
        raise errors.ConversionError(f"{value!r} is not one of {args!r}.", path=path)

    if value is None:
        raise errors.ConversionError(f"Null is not allowed for {_name(hint)}.", path=path)

    if origin in _SEQUENCE_ORIGINS or hint is list:
        if not isinstance(value, list):
            raise errors.ConversionError(f"Expected a list, got {type(value).__name__}.", path=path)
        item_hint = args[0] if args else Any
        return [_coerce(item, item_hint, path=f'{path}[{idx}]') for idx, item in enumerate(value)]

    if origin in _MAPPING_ORIGINS or hint is dict:
        if not isinstance(value, collections.abc.Mapping):
            raise errors.ConversionError(f"Expected an object, got {type(value).__name__}.", path=path)
        value_hint = args[1] if len(args) == 2 else Any
        return {key: _coerce(val, value_hint, path=_join(path, key)) for key, val in value.items()}

    if not isinstance(hint, type):
        raise errors.ConversionError(f"Unsupported type: {hint!r}.", path=path)

    if dataclasses.is_dataclass(hint):
        return _construct(hint, value, path=path)

    if issubclass(hint, enum.Enum):
        try:
            return hint(value)
        except ValueError as e:
            raise errors.ConversionError(str(e), path=path) from e

    if hint is bool:
        if isinstance(value, bool):
            return value
    elif hint is int:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    elif hint is float:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
    elif hint is str:
        if isinstance(value, str):
            return value
    elif hint is datetime.datetime:
        if isinstance(value, str):
            try:
                return iso8601.parse_date(value)
            except iso8601.ParseError as e:
                raise errors.ConversionError(str(e), path=path) from e
    elif isinstance(value, hint):
        return value

    raise errors.ConversionError(f"Expected {_name(hint)}, got {type(value).__name__}.", path=path)


def _dump(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        result: Dict[str, Any] = {}
        for field in dataclasses.fields(value):
            dumped = _dump(getattr(value, field.name))
            if field.metadata.get('omitempty', True) and _is_empty(dumped):
                continue
            result[get_json_name(field)] = dumped
        return result
    elif isinstance(value, enum.Enum):
        return value.value
    elif isinstance(value, datetime.datetime):
        return value.isoformat().replace('+00:00', 'Z')
    elif isinstance(value, collections.abc.Mapping):
        return {str(key): _dump(val) for key, val in value.items()}
    elif isinstance(value, (list, tuple)):
        return [_dump(item) for item in value]
    else:
        return value


def _is_empty(value: typedefs.JsonTree) -> bool:
    return value is None or (isinstance(value, (str, list, dict)) and not value)


def _join(path: str, key: str) -> str:
    return f'{path}.{key}' if path else key


def _name(hint: Any) -> str:
    return hint.__name__ if isinstance(hint, type) else repr(hint)
