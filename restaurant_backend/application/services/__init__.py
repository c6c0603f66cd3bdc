"""Application services."""

from restaurant_backend.application.services.auth_service import AuthService, AuthStateWatcher
from restaurant_backend.application.services.connectivity_service import ConnectivityService
from restaurant_backend.application.services.menu_service import MenuService
from restaurant_backend.application.services.order_service import OrderService
from restaurant_backend.application.services.restaurant_schema import build_restaurant_schema
from restaurant_backend.application.services.sample_data import SampleDataLoader
from restaurant_backend.application.services.schema_provisioner import (
    SchemaProvisioner,
    provision,
)

__all__ = [
    "AuthService",
    "AuthStateWatcher",
    "ConnectivityService",
    "MenuService",
    "OrderService",
    "SampleDataLoader",
    "SchemaProvisioner",
    "build_restaurant_schema",
    "provision",
]
