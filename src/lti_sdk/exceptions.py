"""
Exception classes for LTI Python SDK
"""

from typing import Optional, Dict, Any


class LTISDKError(Exception):
    """Base exception for all LTI SDK errors"""
    
    def __init__(self, message: str, error_code: str = "UNKNOWN_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
    
    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (code: {self.error_code}, details: {self.details})"
        return f"{self.message} (code: {self.error_code})"


class EncodingError(LTISDKError):
    """Exception raised when an input cannot be percent-encoded"""
    
    def __init__(self, message: str, error_code: str = "ENCODING_FAILED", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details)


class SigningError(LTISDKError):
    """Exception raised when the underlying signature computation fails"""
    
    def __init__(self, message: str, error_code: str = "SIGNING_FAILED", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details)


class VerificationError(LTISDKError):
    """Base exception for rejected incoming messages"""
    pass


class ConsumerKeyMismatch(VerificationError):
    """Exception raised when the incoming consumer key is not the expected one"""
    
    def __init__(self, provided: str, expected: str):
        super().__init__(
            "Invalid consumer key provided",
            "CONSUMER_KEY_MISMATCH",
            {"provided": provided, "expected": expected}
        )
        self.provided = provided
        self.expected = expected


class SignatureMismatch(VerificationError):
    """
    Exception raised when the recomputed signature differs from the claimed one.
    
    Attributes:
        expected: Signature recomputed with the configured signer
        provided: Signature carried by the incoming message
    """
    
    def __init__(self, expected: str, provided: str):
        super().__init__(
            f"Invalid signature {provided}, computed {expected}",
            "SIGNATURE_MISMATCH",
            {"expected": expected, "provided": provided}
        )
        self.expected = expected
        self.provided = provided


class ValidationError(LTISDKError):
    """Exception raised for malformed caller input"""
    pass


class ConfigurationError(LTISDKError):
    """Exception raised for configuration loading and validation errors"""
    pass


class ServerCommunicationError(LTISDKError):
    """Exception raised for outbound HTTP errors"""
    
    def __init__(self, message: str, error_code: str = "SERVER_ERROR", 
                 http_status: int = 0, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details)
        self.http_status = http_status
