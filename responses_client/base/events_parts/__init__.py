"""Stream event model and decoder."""
