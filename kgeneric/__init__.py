"""
The main kgeneric module for all the exported functions & classes.
"""
# isort: skip_file

# Unlike all other places, where we import other modules and refer
# the functions via the modules, this is the library's top-level interface,
# as it is seen by the users. So, we export the individual functions.

from kgeneric._cogs.clients.errors import (
    APIError,
    APIClientError,
    APIServerError,
    APIUnauthorizedError,
    APIForbiddenError,
    APINotFoundError,
    APIConflictError,
)
from kgeneric._cogs.clients.login import (
    login,
    login_with_kubeconfig,
    login_with_service_account,
)
from kgeneric._cogs.configs.configuration import (
    AccessSettings,
    NetworkingSettings,
    DiscoverySettings,
)
from kgeneric._cogs.helpers.loggers import (
    configure,
    LogFormat,
    ObjectLogger,
)
from kgeneric._cogs.helpers.typedefs import (
    Logger,
)
from kgeneric._cogs.helpers.versions import (
    version as __version__,
)
from kgeneric._cogs.structs.bodies import (
    RawBody,
    RawList,
)
from kgeneric._cogs.structs.credentials import (
    LoginError,
    ConnectionInfo,
)
from kgeneric._cogs.structs.objects import (
    Object,
    ObjectList,
    ObjectMeta,
    ListMeta,
    OwnerReference,
)
from kgeneric._cogs.structs.references import (
    GroupVersionKind,
    ObjectAddress,
    Resource,
)
from kgeneric._core.access.converting import (
    into_typed,
    into_typed_list,
    from_typed,
)
from kgeneric._core.access.descriptors import (
    Descriptor,
)
from kgeneric._core.access.errors import (
    AccessError,
    DescriptorError,
    MissingKindError,
    MissingVersionError,
    MissingNameError,
    UnsupportedObjectError,
    UnknownResourceError,
    ScopeMismatchError,
    MissingNamespaceError,
    ConversionError,
)
from kgeneric._core.access.operations import (
    Client,
)
from kgeneric._core.access.options import (
    GetOptions,
    ListOptions,
    GetOption,
    ListOption,
    with_get_options,
    with_list_options,
    resource_version,
    label_selector,
    field_selector,
    continue_from,
    limit,
)
from kgeneric._core.access.resolving import (
    Discovery,
    Transport,
    APIDiscovery,
    APITransport,
    ResourceClient,
    Resolver,
    ResolverCache,
)

__all__ = [
    'APIError',
    'APIClientError',
    'APIServerError',
    'APIUnauthorizedError',
    'APIForbiddenError',
    'APINotFoundError',
    'APIConflictError',
    'login',
    'login_with_kubeconfig',
    'login_with_service_account',
    'AccessSettings',
    'NetworkingSettings',
    'DiscoverySettings',
    'configure',
    'LogFormat',
    'ObjectLogger',
    'Logger',
    'RawBody',
    'RawList',
    'LoginError',
    'ConnectionInfo',
    'Object',
    'ObjectList',
    'ObjectMeta',
    'ListMeta',
    'OwnerReference',
    'GroupVersionKind',
    'ObjectAddress',
    'Resource',
    'into_typed',
    'into_typed_list',
    'from_typed',
    'Descriptor',
    'AccessError',
    'DescriptorError',
    'MissingKindError',
    'MissingVersionError',
    'MissingNameError',
    'UnsupportedObjectError',
    'UnknownResourceError',
    'ScopeMismatchError',
    'MissingNamespaceError',
    'ConversionError',
    'Client',
    'GetOptions',
    'ListOptions',
    'GetOption',
    'ListOption',
    'with_get_options',
    'with_list_options',
    'resource_version',
    'label_selector',
    'field_selector',
    'continue_from',
    'limit',
    'Discovery',
    'Transport',
    'APIDiscovery',
    'APITransport',
    'ResourceClient',
    'Resolver',
    'ResolverCache',
]
