"""
Custom exceptions for slice upload operations.

This module defines exception classes raised inside the upload engine.
Most of them never leave upload_file(): the coordinator turns them into
an empty result and keeps the slice state file for the next attempt.
"""
from typing import Optional


class UploadException(Exception):
    """Base exception for all upload-related errors."""
    
    def __init__(self, message: str, error_code: Optional[int] = None) -> None:
        """
        Initialize the exception.
        
        Args:
            message: Error message
            error_code: Numeric error code (if available)
        """
        self.error_code = error_code
        super().__init__(message)


class SliceStateError(UploadException):
    """Raised when a persisted slice state file cannot be restored."""
    
    def __init__(
        self,
        message: str,
        state_path: Optional[str] = None,
        error_code: Optional[int] = None
    ) -> None:
        """
        Initialize the exception.
        
        Args:
            message: Error message
            state_path: Path of the offending slice state file
            error_code: Numeric error code (if available)
        """
        self.state_path = state_path
        super().__init__(message, error_code)


class SlicePlanningError(UploadException):
    """Raised when a file cannot be fingerprinted for sliced upload."""
    pass
