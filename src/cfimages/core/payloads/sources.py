"""Local payload sources: buffers, files, open handles and decoded images."""

from __future__ import annotations

import asyncio
import io
import os
from pathlib import Path
from typing import BinaryIO

from PIL import Image

from cfimages.core.payloads.base import PayloadSource
from cfimages.core.utils.constants import (
    DEFAULT_FILE_NAME,
    DEFAULT_JPEG_QUALITY,
    DEFAULT_MEDIA_TYPE,
    FALLBACK_MEDIA_TYPE,
    PILLOW_FORMAT_MEDIA_TYPE_MAP,
)
from cfimages.core.utils.mime import media_type_for_name


class BytesPayload(PayloadSource):
    """Payload held entirely in memory."""

    def __init__(
        self,
        data: bytes,
        *,
        media_type: str = DEFAULT_MEDIA_TYPE,
        name: str = DEFAULT_FILE_NAME,
    ) -> None:
        self._data = bytes(data)
        self._media_type = media_type
        self._name = name

    @property
    def media_type(self) -> str:
        return self._media_type

    @property
    def name(self) -> str:
        return self._name

    @property
    def size_in_bytes(self) -> int:
        return len(self._data)

    async def fetch_bytes(self) -> bytes:
        return self._data


def from_bytes(
    data: bytes,
    media_type: str = DEFAULT_MEDIA_TYPE,
    name: str = DEFAULT_FILE_NAME,
) -> BytesPayload:
    """Create a payload from an in-memory buffer."""
    return BytesPayload(data, media_type=media_type, name=name)


class FilePayload(PayloadSource):
    """Payload read from a file on disk when the upload starts."""

    def __init__(self, path: str | Path, *, media_type: str | None = None) -> None:
        self._path = Path(path)
        self._media_type = media_type or media_type_for_name(self._path.name)

    @classmethod
    def from_path(cls, path: str | Path) -> FilePayload | None:
        """Return a payload for ``path``, or None if it is not an existing file."""
        candidate = Path(path)
        if not candidate.is_file():
            return None
        return cls(candidate)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def media_type(self) -> str:
        return self._media_type

    @property
    def name(self) -> str:
        return self._path.name

    @property
    def size_in_bytes(self) -> int | None:
        try:
            return self._path.stat().st_size
        except OSError:
            return None

    async def fetch_bytes(self) -> bytes:
        return await asyncio.to_thread(self._path.read_bytes)


class StreamPayload(PayloadSource):
    """Payload read from an already-open binary handle.

    The handle is read from its position at construction to the end; it is
    not closed by the payload. Seekable handles are rewound before every
    read so the payload can be fetched more than once. A non-seekable
    handle can be fetched only once.
    """

    def __init__(
        self,
        stream: BinaryIO,
        *,
        name: str | None = None,
        media_type: str | None = None,
    ) -> None:
        self._stream = stream
        self._start = stream.tell() if stream.seekable() else None
        self._consumed = False
        self._name = name or _handle_file_name(stream)
        inferred = media_type_for_name(self._name)
        self._media_type = media_type or (
            DEFAULT_MEDIA_TYPE if inferred == FALLBACK_MEDIA_TYPE else inferred
        )

    @property
    def media_type(self) -> str:
        return self._media_type

    @property
    def name(self) -> str:
        return self._name

    def _read(self) -> bytes:
        if self._start is not None:
            self._stream.seek(self._start)
        elif self._consumed:
            raise OSError("Stream is not seekable and has already been read")

        data = self._stream.read()
        if data is None:
            raise OSError("Cannot read from stream")

        self._consumed = True
        return bytes(data)

    async def fetch_bytes(self) -> bytes:
        return await asyncio.to_thread(self._read)


def _handle_file_name(stream: BinaryIO) -> str:
    """File name of an open handle; handles opened from a descriptor have none."""
    handle_name = getattr(stream, "name", None)
    if isinstance(handle_name, (str, os.PathLike)) and os.fspath(handle_name):
        return Path(handle_name).name
    return DEFAULT_FILE_NAME


class PillowImagePayload(PayloadSource):
    """Payload encoded from a decoded Pillow image when the upload starts."""

    def __init__(
        self,
        image: Image.Image,
        *,
        image_format: str = "JPEG",
        quality: int = DEFAULT_JPEG_QUALITY,
        name: str = DEFAULT_FILE_NAME,
    ) -> None:
        normalized = image_format.upper()
        if normalized not in PILLOW_FORMAT_MEDIA_TYPE_MAP:
            raise ValueError(
                f"Unsupported image format '{image_format}'. "
                f"Allowed formats: {', '.join(sorted(PILLOW_FORMAT_MEDIA_TYPE_MAP))}"
            )

        self._image = image
        self._format = normalized
        self._quality = quality
        self._name = name

    @property
    def media_type(self) -> str:
        return PILLOW_FORMAT_MEDIA_TYPE_MAP[self._format]

    @property
    def name(self) -> str:
        return self._name

    def _encode(self) -> bytes:
        image = self._image
        if self._format == "JPEG" and image.mode not in ("RGB", "L"):
            # JPEG has no alpha channel: flatten onto white
            background = Image.new("RGB", image.size, (255, 255, 255))
            rgba = image.convert("RGBA")
            background.paste(rgba, mask=rgba.split()[-1])
            image = background

        output = io.BytesIO()
        if self._format == "PNG":
            image.save(output, format="PNG", optimize=True)
        else:
            image.save(output, format=self._format, quality=self._quality)
        return output.getvalue()

    async def fetch_bytes(self) -> bytes:
        return await asyncio.to_thread(self._encode)
