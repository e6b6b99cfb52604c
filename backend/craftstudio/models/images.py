"""Encoded image payloads passed between pipeline stages."""

from __future__ import annotations

import base64
import re
from dataclasses import dataclass

_DATA_URL_RE = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+);base64,(?P<data>.*)$", re.DOTALL)


@dataclass(frozen=True)
class ImagePayload:
    """Raw image bytes plus their MIME type."""

    data: bytes
    mime_type: str = "image/png"

    def __bool__(self) -> bool:
        return len(self.data) > 0

    @property
    def b64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")

    def to_data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.b64}"

    @classmethod
    def from_data_url(cls, url: str) -> ImagePayload:
        match = _DATA_URL_RE.match(url.strip())
        if not match:
            raise ValueError("Not a base64 data URL")
        return cls(data=base64.b64decode(match.group("data")), mime_type=match.group("mime"))

    def __repr__(self) -> str:
        return f"ImagePayload(mime_type={self.mime_type!r}, size={len(self.data)})"
