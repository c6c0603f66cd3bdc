"""Domain layer: schema value objects, enums, and exceptions.

No dependency on Appwrite, httpx, or configuration.
"""
