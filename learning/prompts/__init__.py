"""Prompt templates for curriculum generation, tutoring and onboarding."""
