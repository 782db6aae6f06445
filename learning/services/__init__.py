"""Learning business logic."""
