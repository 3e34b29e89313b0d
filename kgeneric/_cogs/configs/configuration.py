"""
All configuration flags, options, settings to fine-tune the access layer.

All settings are grouped semantically just for convenience
(instead of a flat mega-object with all the values in it).

In this library, they are called *"settings"* (plural).
Combined, they form a *"configuration"* (singular).

All of the settings have reasonable defaults, so ``AccessSettings()``
is sufficient for most cases. The settings object is created once
per :class:`kgeneric.Client` and is shared by all of its calls.
"""
import dataclasses
from typing import Iterable, Optional


@dataclasses.dataclass
class NetworkingSettings:

    request_timeout: Optional[float] = 5 * 60  # == aiohttp.client.DEFAULT_TIMEOUT
    """
    A timeout for the API requests (in seconds), from connecting to reading.
    If ``None``, then no timeout is used and the requests can hang forever.
    """

    connect_timeout: Optional[float] = None
    """
    A timeout for the connection establishment (in seconds).
    If ``None``, then only the overall ``request_timeout`` applies.
    """

    error_backoffs: Iterable[float] = ()
    """
    Backoff intervals for retrying the API requests on server & network errors.

    Only HTTP 5xx responses, connection errors, and timeouts are retried.
    All other errors (e.g. HTTP 404 or HTTP 403) are escalated immediately.

    The default is to never retry: the Get/List operations fail on the first
    error, and the retry policy is left to the caller. For a more tolerant
    client, set it to e.g. ``(1, 1, 2, 3, 5)``.

    If needed, this value can be an arbitrary collection/iterator/object:
    only ``iter()`` is called on every new request, no other protocols
    are required; but make sure that it is re-iterable for multiple uses.
    """


@dataclasses.dataclass
class DiscoverySettings:

    caching: bool = True
    """
    Should the discovered resources be remembered for the lifetime of the client?

    If enabled (the default), every group/version/kind is discovered only once,
    and all later calls reuse the resolved resource client without requests
    to the discovery endpoints. The cache is never invalidated implicitly;
    use :meth:`kgeneric.Resolver.invalidate` if the cluster's CRDs change.

    If disabled, the discovery endpoints are requested on every call.
    This is slower, but it always reflects the current state of the cluster,
    which is convenient while the custom resources are being developed.
    """


@dataclasses.dataclass
class AccessSettings:
    networking: NetworkingSettings = dataclasses.field(default_factory=NetworkingSettings)
    discovery: DiscoverySettings = dataclasses.field(default_factory=DiscoverySettings)
