from .exceptions import NoEnglishVideosAvailable, NoVideosAvailable, VideoCatalogError
from .service import RandomVideo, RandomVideoService

__all__ = [
    "NoEnglishVideosAvailable",
    "NoVideosAvailable",
    "VideoCatalogError",
    "RandomVideo",
    "RandomVideoService",
]
