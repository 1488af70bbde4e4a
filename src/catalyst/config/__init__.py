"""Configuration layer — schema, layered YAML store, CLI settings, logging."""
