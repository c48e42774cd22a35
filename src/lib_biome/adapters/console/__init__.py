"""Console sink adapters."""
