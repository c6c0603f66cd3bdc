"""Application layer: provisioning and service wrappers over injected gateways."""
