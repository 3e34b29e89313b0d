"""
Detecting the library's own version.

The codebase does not contain the version directly: it comes from the tags
of the versioning system at packaging time. It is used only to identify
the library in the ``User-Agent`` header of the API requests.
"""
import importlib.metadata
from typing import Optional

version: Optional[str] = None

try:
    name, *_ = __name__.split('.')  # usually "kgeneric", unless renamed/forked.
    version = importlib.metadata.version(name)
except importlib.metadata.PackageNotFoundError:
    pass  # running from a source checkout without installation.
