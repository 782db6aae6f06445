"""
Custom Exception Hierarchy for the Learning Module

Exception Hierarchy:
    LearningError (base)
    ├── StateError
    │   └── StateTransitionError
    ├── PromptError
    │   └── PromptTemplateError
    └── ConfigurationError

Lookups, parsing and storage never raise; these cover programming errors
and opt-in validation only.
"""

from typing import Optional


class LearningError(Exception):
    """Base exception for all learning module errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


# State Errors

class StateError(LearningError):
    """Base exception for curriculum state errors."""
    pass


class StateTransitionError(StateError):
    """Raised when a node status transition is invalid."""

    def __init__(self, from_state: str, to_state: str, reason: str):
        message = f"Invalid state transition from '{from_state}' to '{to_state}': {reason}"
        super().__init__(message)
        self.from_state = from_state
        self.to_state = to_state
        self.reason = reason


# Prompt Errors

class PromptError(LearningError):
    """Base exception for prompt-related errors."""
    pass


class PromptTemplateError(PromptError):
    """Raised when prompt template rendering fails."""

    def __init__(self, template_name: str, missing_vars: list[str]):
        message = f"Prompt template '{template_name}' missing variables: {', '.join(missing_vars)}"
        super().__init__(message)
        self.template_name = template_name
        self.missing_vars = missing_vars


# Configuration Errors

class ConfigurationError(LearningError):
    """Raised when configuration is invalid or missing."""

    def __init__(self, config_key: str, reason: str):
        message = f"Configuration error for '{config_key}': {reason}"
        super().__init__(message)
        self.config_key = config_key
        self.reason = reason
