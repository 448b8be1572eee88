"""Drive redirector.

A tiny HTTP service that redirects `/` to a single Google Drive file and lets an
authenticated client repoint that file at runtime.
"""

__version__ = "0.1.0"

from drive_redirector.config import RedirectorConfig, load_config
from drive_redirector.resource import RedirectResource

__all__ = ["__version__", "RedirectorConfig", "RedirectResource", "load_config"]
