"""Domain layer: validation engine and event records."""
