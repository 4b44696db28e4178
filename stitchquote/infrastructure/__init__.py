"""Infrastructure adapters: option sources and storage."""
