from .instant import InstantBackend
from .threadpool import ThreadPoolBackend

__all__ = [
    "InstantBackend",
    "ThreadPoolBackend",
]
