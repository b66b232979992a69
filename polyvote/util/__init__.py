"""Cross-cutting utilities: configuration wiring, logging, observability."""
