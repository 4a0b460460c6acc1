"""
Exception classes for Seewo Python SDK
"""

from typing import Optional, Dict, Any


class SeewoSDKError(Exception):
    """Base exception for all Seewo SDK errors"""

    def __init__(self, message: str, error_code: str = "UNKNOWN_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (code: {self.error_code}, details: {self.details})"
        return f"{self.message} (code: {self.error_code})"


class ValidationError(SeewoSDKError):
    """Exception raised for validation failures"""
    pass


class ConfigurationError(SeewoSDKError):
    """Exception raised for invalid or incomplete client configuration"""
    pass


class TemplateError(SeewoSDKError):
    """Exception raised when a URI template cannot be resolved"""

    def __init__(self, message: str, template: str = "", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "TEMPLATE_ERROR", details)
        self.template = template


class UrlError(SeewoSDKError):
    """Exception raised when the resolved request URL is malformed"""

    def __init__(self, message: str, url: str = "", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "URL_ERROR", details)
        self.url = url


class HeaderError(SeewoSDKError):
    """Exception raised for header names or values that are invalid in HTTP"""

    def __init__(self, message: str, name: str, value: str, error_code: str = "INVALID_HEADER_VALUE"):
        super().__init__(message, error_code, {"name": name, "value": value})
        self.name = name
        self.value = value


class TransportError(SeewoSDKError):
    """Exception raised when the request could not be sent"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "TRANSPORT_ERROR", details)


class StatusError(SeewoSDKError):
    """Exception raised for non-success HTTP status codes"""

    def __init__(self, message: str, status_code: int, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "STATUS_ERROR", details)
        self.status_code = status_code


class DecodeError(SeewoSDKError):
    """Exception raised when a response body is not valid JSON or has the wrong shape"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "DECODE_ERROR", details)
