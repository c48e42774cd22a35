"""Application layer: ports and use cases wiring the domain to adapters."""
