"""Infrastructure adapters: configuration, persistence, storage and delivery."""
