#!/usr/bin/env python3
"""
Exception hierarchy for the flu validation toolkit.
All custom exceptions should inherit from FluError.

Exceptions are reserved for hard preconditions (inconsistent reference data,
malformed ranges, mismatched segments). Properties of a sequenced sample are
reported as values from flu.models.errors, never raised.
"""
from typing import Dict, Any, Optional


class FluError(Exception):
    """Base exception for all flu-related errors"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """Initialize with error message and optional details

        Args:
            message: Error message
            details: Optional details dictionary with context
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ConfigurationError(FluError):
    """Error related to configuration issues"""
    pass


class FileOperationError(FluError):
    """Error during file operations"""
    pass


class ValidationError(FluError):
    """Data validation error"""
    pass


class SegmentMismatchError(ValidationError):
    """Assembly and reference are known to be different segments"""
    pass


class AlignmentError(FluError):
    """Error raised by the pairwise aligner"""
    pass
