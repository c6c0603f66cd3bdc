"""Application DTOs (results and inputs of services; no transport types)."""
