"""
Clients HTTP des services externes et politique de relance partagee.
"""

from anime_collection.adapters.api.cloudinary_client import CloudinaryMediaHost
from anime_collection.adapters.api.retry import (
    RemoteBusyError,
    request_with_retry,
    with_retry,
)

__all__ = ["CloudinaryMediaHost", "RemoteBusyError", "request_with_retry", "with_retry"]
