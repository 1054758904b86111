"""Infrastructure layer components.

HTTP plumbing and the client for the console's REST persistence service.
"""

from studio.infrastructure.console_api import ConsoleAPIClient, UploadResult
from studio.infrastructure.http_client import HTTPClient

__all__ = ["ConsoleAPIClient", "HTTPClient", "UploadResult"]
