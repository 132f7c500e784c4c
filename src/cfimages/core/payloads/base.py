"""Abstract contract for binary upload payloads."""

from abc import ABC, abstractmethod


class PayloadSource(ABC):
    """Contract for anything that can be uploaded as an image.

    Implementations could be a file on disk, an open handle, a decoded
    image, an S3 object or an in-memory buffer. The images client depends
    on this interface, not the implementation; the calling application
    picks the provider that fits its host environment.

    ``media_type`` and ``name`` are known up front. Bytes are produced only
    when ``fetch_bytes`` is awaited, once per upload attempt.
    """

    @property
    @abstractmethod
    def media_type(self) -> str:
        """MIME type of the payload (e.g. 'image/jpeg')."""

    @property
    @abstractmethod
    def name(self) -> str:
        """File name sent in the multipart content disposition."""

    @property
    def size_in_bytes(self) -> int | None:
        """Payload size when known without reading it."""
        return None

    @abstractmethod
    async def fetch_bytes(self) -> bytes:
        """Produce the payload bytes.

        Raises:
            OSError: If the underlying source cannot be read
        """

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(name={self.name!r}, media_type={self.media_type!r}, "
            f"size_in_bytes={self.size_in_bytes!r})"
        )
