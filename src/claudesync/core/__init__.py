"""Core reconciliation engine: fingerprints, item models, manifest, and differ."""
