"""Custom exception hierarchy for better error handling."""
from fastapi import HTTPException, status


class RecursiveLearningException(Exception):
    """Base exception for all application errors."""
    pass


class SessionNotFoundException(RecursiveLearningException):
    """Raised when a learning session is not found in the store."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"Session {session_id} not found")

    def to_http_exception(self) -> HTTPException:
        return HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Session {self.session_id} not found"
        )


class NodeNotFoundException(RecursiveLearningException):
    """Raised when a curriculum node is not part of the tree."""

    def __init__(self, node_id: str):
        self.node_id = node_id
        super().__init__(f"Node {node_id} not found")

    def to_http_exception(self) -> HTTPException:
        return HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Node not found"
        )


class LLMProviderException(RecursiveLearningException):
    """Raised when the completion provider fails."""

    def __init__(self, original_error: Exception):
        self.original_error = original_error
        super().__init__(f"LLM provider error: {str(original_error)}")

    def to_http_exception(self) -> HTTPException:
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="AI service temporarily unavailable"
        )
