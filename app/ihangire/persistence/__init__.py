"""Local key-value storage and the per-user history store."""
