"""
Options of the Get/List operations.

An option is any callable that accepts the options accumulator and mutates
it in place. The operations build a zero-valued accumulator, apply all the
options in the order of the call site, and pass the result to the request.
So, if several options set the same field, the last one wins::

    await client.list('default', dest,
                      kgeneric.label_selector('app=foo'),
                      kgeneric.with_list_options({'labelSelector': 'app=bar'}))
    # lists with labelSelector=app=bar

No validation of the selectors or versions is done locally: it is the server's
responsibility. Empty values mean "not set" and are omitted from the requests.
"""
import collections.abc
import dataclasses
from typing import Any, Callable, Dict, Mapping, Optional, Union

from kgeneric._core.access import converting


@dataclasses.dataclass
class GetOptions:
    resource_version: str = ''
    """ The version to read, or empty for the latest one. """

    def as_params(self) -> Dict[str, str]:
        return _as_params(self)


@dataclasses.dataclass
class ListOptions:
    resource_version: str = ''
    label_selector: str = ''
    field_selector: str = ''
    continue_: str = ''
    limit: Optional[int] = None
    """ The page size; the next page is requested with the continuation token. """

    def as_params(self) -> Dict[str, str]:
        return _as_params(self)


GetOption = Callable[[GetOptions], None]
ListOption = Callable[[ListOptions], None]
AnyOption = Callable[[Any], None]


def apply_get_options(*options: GetOption) -> GetOptions:
    accumulator = GetOptions()
    for option in options:
        option(accumulator)
    return accumulator


def apply_list_options(*options: ListOption) -> ListOptions:
    accumulator = ListOptions()
    for option in options:
        option(accumulator)
    return accumulator


def with_get_options(meta: Union[GetOptions, Mapping[str, Any]]) -> GetOption:
    """
    Copy the non-empty fields of the store-defined options to the accumulator.

    The options can be given either as :class:`GetOptions` or as a mapping
    in the API's wire form (``{"resourceVersion": "123"}``).
    """
    values = _get_values(GetOptions, meta)

    def option(accumulator: GetOptions) -> None:
        for name, value in values.items():
            setattr(accumulator, name, value)

    return option


def with_list_options(meta: Union[ListOptions, Mapping[str, Any]]) -> ListOption:
    """
    Copy the non-empty fields of the store-defined options to the accumulator.

    The options can be given either as :class:`ListOptions` or as a mapping
    in the API's wire form (``{"labelSelector": "app=x", "continue": "..."}``).
    """
    values = _get_values(ListOptions, meta)

    def option(accumulator: ListOptions) -> None:
        for name, value in values.items():
            setattr(accumulator, name, value)

    return option


def resource_version(value: str) -> AnyOption:
    def option(accumulator: Union[GetOptions, ListOptions]) -> None:
        accumulator.resource_version = value
    return option


def label_selector(value: str) -> ListOption:
    def option(accumulator: ListOptions) -> None:
        accumulator.label_selector = value
    return option


def field_selector(value: str) -> ListOption:
    def option(accumulator: ListOptions) -> None:
        accumulator.field_selector = value
    return option


def continue_from(token: str) -> ListOption:
    def option(accumulator: ListOptions) -> None:
        accumulator.continue_ = token
    return option


def limit(value: Optional[int]) -> ListOption:
    def option(accumulator: ListOptions) -> None:
        accumulator.limit = value
    return option


def _get_values(cls: type, meta: Any) -> Dict[str, Any]:
    fields = dataclasses.fields(cls)
    if isinstance(meta, cls):
        values = {field.name: getattr(meta, field.name) for field in fields}
    elif isinstance(meta, collections.abc.Mapping):
        values = {
            field.name: meta[converting.get_json_name(field)]
            for field in fields
            if converting.get_json_name(field) in meta
        }
    else:
        raise TypeError(f"Unsupported options type: {type(meta).__name__}")
    return {name: value for name, value in values.items() if not _is_empty(value)}


def _as_params(options: Any) -> Dict[str, str]:
    return {
        converting.get_json_name(field): str(getattr(options, field.name))
        for field in dataclasses.fields(options)
        if not _is_empty(getattr(options, field.name))
    }


def _is_empty(value: Any) -> bool:
    return value is None or value == ''
