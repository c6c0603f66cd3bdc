"""Shared utilities: telemetry and cross-cutting helpers.

Used by domain, application, and infrastructure. No business logic.
"""

from restaurant_backend.shared.utils import generate_cuid, iso_now, utc_now

__all__ = ["generate_cuid", "iso_now", "utc_now"]
