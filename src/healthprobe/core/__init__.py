"""Core domain of the health probe: models, ports and pure pipeline steps."""
