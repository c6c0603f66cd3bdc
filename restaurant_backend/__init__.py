"""Restaurant backend: Appwrite schema provisioning and service wrappers."""

__version__ = "0.1.0"
