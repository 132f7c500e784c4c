from pathlib import PurePath

from cfimages.core.utils.constants import EXTENSION_MEDIA_TYPE_MAP, FALLBACK_MEDIA_TYPE


def media_type_for_name(name: str) -> str:
    """Infer a media type from the extension of a file name."""
    extension = PurePath(name).suffix.lower().lstrip(".")
    return EXTENSION_MEDIA_TYPE_MAP.get(extension, FALLBACK_MEDIA_TYPE)
