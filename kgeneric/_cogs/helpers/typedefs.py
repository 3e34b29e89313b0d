"""
Rudimentary type [re-]definitions shared across the codebase.

The stdlib's ``logging.LoggerAdapter`` is a generic in the type-sheds,
but not at runtime, so it is defined here once for all the modules.
The JSON-tree aliases are what the API returns before any conversion.
"""
import logging
from typing import TYPE_CHECKING, Any, Dict, List, Union

if TYPE_CHECKING:
    LoggerAdapter = logging.LoggerAdapter[Any]
else:
    LoggerAdapter = logging.LoggerAdapter

# As publicly exposed: we only promise that it is based on one of the built-in loggable classes.
Logger = Union[logging.Logger, LoggerAdapter]

# A decoded JSON document as returned by the API server. Not validated in any way.
JsonScalar = Union[None, bool, int, float, str]
JsonTree = Union[JsonScalar, List[Any], Dict[str, Any]]
