"""Infrastructure layer: Appwrite REST gateways."""
