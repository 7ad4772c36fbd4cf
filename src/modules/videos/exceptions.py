class VideoCatalogError(Exception):
    """Base class for video catalog lookups that found nothing to serve."""


class NoVideosAvailable(VideoCatalogError):
    """No analyzed videos exist yet."""


class NoEnglishVideosAvailable(VideoCatalogError):
    """Analyzed videos exist but none of the sampled ones are English."""
