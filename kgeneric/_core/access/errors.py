"""
Errors of the access layer itself, as opposed to the API errors.

The API errors (:mod:`kgeneric._cogs.clients.errors`) come from the server.
These ones are raised locally: either before any request is made (malformed
destination objects, unknown kinds, mismatching scopes), or after the response
is received (the response does not fit the destination's declared types).
"""
from typing import Optional

from kgeneric._cogs.structs import references


class AccessError(Exception):
    """ The base for all errors of the Get/List operations raised locally. """


class DescriptorError(AccessError):
    """ The destination object cannot be identified or addressed. """


class MissingKindError(DescriptorError):
    pass


class MissingVersionError(DescriptorError):
    pass


class MissingNameError(DescriptorError):
    pass


class UnsupportedObjectError(DescriptorError):
    """ The destination can be identified, but cannot be filled from the responses. """


class UnknownResourceError(AccessError):
    """ The cluster does not serve the requested group/version/kind. """

    def __init__(self, gvk: references.GroupVersionKind) -> None:
        super().__init__(f"The cluster does not serve {gvk}.")
        self.gvk = gvk


class ScopeMismatchError(AccessError):
    """ The namespace does not fit the resource's scope (namespaced/cluster-scoped). """

    def __init__(self, message: str, *, resource: references.Resource) -> None:
        super().__init__(message)
        self.resource = resource


class MissingNamespaceError(ScopeMismatchError):
    pass


class ConversionError(AccessError):
    """
    A value of the response does not fit the declared type of a field.

    The path is dotted from the root of the converted object,
    with the list indexes in brackets: e.g. ``spec.containers[0].ports``.
    """

    def __init__(self, message: str, *, path: Optional[str] = None) -> None:
        super().__init__(f"{path}: {message}" if path else message)
        self.path = path
