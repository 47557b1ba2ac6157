"""Application services that sequence the adapters."""
