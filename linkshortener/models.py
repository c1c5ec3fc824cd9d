import base64
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Link:
    """Represent a freshly issued short link.

    Attributes:
        key (str):
            Hash-id encoding of the counter value used to issue the link.
        url (str):
            Base path joined with the key by a single '/'.

    Example:
        >>> Link(key='vq5ejng0p6', url='/some/redirect/vq5ejng0p6')
        Link(key='vq5ejng0p6', url='/some/redirect/vq5ejng0p6')
    """

    key: str
    url: str


@dataclass(frozen=True)
class LinkRecord:
    """Represent a persisted key to target URL mapping.

    Attributes:
        key (str):
            Issued link key.
        target (str):
            Destination the key redirects to.
        expires_at (Optional[datetime]):
            Moment after which the data store drops the mapping.
    """

    key: str
    target: str
    expires_at: Optional[datetime] = None


@dataclass(frozen=True)
class QrImage:
    """Rendered QR code.

    Attributes:
        content (bytes):
            Serialized image (SVG markup or PNG bytes).
        media_type (str):
            MIME type of `content`, e.g. 'image/svg+xml'.
        version (int):
            QR version (1-40) the payload was fitted into.
    """

    content: bytes
    media_type: str
    version: int

    def to_base64(self) -> str:
        return base64.b64encode(self.content).decode('ascii')

    def to_data_url(self) -> str:
        return f'data:{self.media_type};base64,{self.to_base64()}'
