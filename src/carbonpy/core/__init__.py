"""Core domain: measurements, expansion and the Graphite reporter."""
