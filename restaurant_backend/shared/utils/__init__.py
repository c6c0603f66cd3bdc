"""Shared utility helpers (datetime, id generation)."""

from restaurant_backend.shared.utils.datetime import iso_now, utc_now
from restaurant_backend.shared.utils.generators import generate_cuid

__all__ = ["generate_cuid", "iso_now", "utc_now"]
