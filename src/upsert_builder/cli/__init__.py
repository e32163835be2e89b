"""Command-line interface for upsert-builder."""
