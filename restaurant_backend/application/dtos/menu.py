"""DTOs for menu use cases."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ImageUpload:
    """Image file to store in the images bucket alongside a menu item."""

    filename: str
    content: bytes
    content_type: str | None = None
