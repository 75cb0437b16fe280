"""Gateway, auth and input guard services."""
