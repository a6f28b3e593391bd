"""Infrastructure: SQL persistence and outbound HTTP adapters."""
