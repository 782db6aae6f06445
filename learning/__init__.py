"""Personalized learning core: curriculum trees, tutoring context and sessions."""
