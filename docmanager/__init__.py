"""Document management backend with simulated ingestion pipeline."""
