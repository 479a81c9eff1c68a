"""
Revocable artifact handles.

An ArtifactStore hands out opaque URLs for byte payloads, in the manner of a
browser object URL: a handle stays resolvable until it is revoked, after which
the bytes are released. Each compilation session owns its own store.
"""

import uuid
from typing import Dict

URL_PREFIX = "blob:texdesk/"


class ArtifactStore:
    """
    In-memory registry of byte payloads addressed by revocable URLs.

    Example:
        store = ArtifactStore()
        url = store.create(pdf_bytes, "application/pdf")
        data = store.resolve(url)
        store.revoke(url)
    """

    def __init__(self):
        self._payloads: Dict[str, bytes] = {}
        self._media_types: Dict[str, str] = {}

    def create(self, data: bytes, media_type: str = "application/octet-stream") -> str:
        """
        Register a payload and return its handle URL.

        Args:
            data: Payload bytes (copied)
            media_type: MIME type recorded with the payload

        Returns:
            URL of the form blob:texdesk/<uuid>
        """
        url = f"{URL_PREFIX}{uuid.uuid4()}"
        self._payloads[url] = bytes(data)
        self._media_types[url] = media_type
        return url

    def resolve(self, url: str) -> bytes:
        """
        Return the payload behind a live handle.

        Raises:
            KeyError: If the handle was revoked or never issued
        """
        if url not in self._payloads:
            raise KeyError(f"Artifact handle is not live: {url}")
        return self._payloads[url]

    def media_type(self, url: str) -> str:
        if url not in self._media_types:
            raise KeyError(f"Artifact handle is not live: {url}")
        return self._media_types[url]

    def revoke(self, url: str) -> bool:
        """Release a handle. Returns False if it was not live."""
        self._media_types.pop(url, None)
        return self._payloads.pop(url, None) is not None

    def revoke_all(self) -> int:
        """Release every live handle and return how many were released."""
        count = len(self._payloads)
        self._payloads.clear()
        self._media_types.clear()
        return count

    def is_live(self, url: str) -> bool:
        return url in self._payloads

    @property
    def live_count(self) -> int:
        return len(self._payloads)
