"""Core: configuration, domain and orchestration; no presentation concerns."""
