"""Infrastructure adapters: HTTP, ZIP extraction and PDF rendering."""
