"""Application layer: descriptors, rule factory, event validator and configuration."""
