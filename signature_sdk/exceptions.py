"""
Signature SDK Exceptions

Custom exceptions for signature request construction and serialization errors.
"""


class SignatureSDKError(Exception):
    """Base exception for all signature SDK errors."""
    pass


class ValidationError(SignatureSDKError):
    """
    Raised when a required argument is missing or empty.
    
    Records which argument failed when it is known.
    """
    def __init__(self, message: str, field: str = None):
        self.field = field
        super().__init__(message)


class IndexOutOfRangeError(SignatureSDKError, IndexError):
    """
    Raised when an insertion position falls outside a list.
    
    Also an IndexError, so callers that already guard list
    access keep working.
    """
    def __init__(self, message: str, index: int = None, size: int = None):
        self.index = index
        self.size = size
        super().__init__(message)


class SerializationError(SignatureSDKError):
    """
    Raised when POST fields cannot be built from a signature request.
    
    Always raised from the underlying failure, which is also kept
    on ``cause``. Not retriable: the request itself is malformed.
    """
    def __init__(self, message: str, cause: Exception = None):
        self.cause = cause
        super().__init__(message)
