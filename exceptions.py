"""
Custom exception classes for the Portfolio API

Each exception carries the HTTP status it maps to; the handlers in main.py
turn them into JSON error responses.
"""

from typing import Optional, Dict, Any


class PortfolioAPIException(Exception):
    """Base exception for all Portfolio API errors"""

    status_code = 500

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[Any] = None,
    ):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.message, "success": False}
        if self.details:
            body["details"] = self.details
        return body


class ConfigurationError(PortfolioAPIException):
    """Raised when configuration is invalid or missing"""

    status_code = 500


class DatabaseConnectionError(PortfolioAPIException):
    """Raised when the document store is unreachable or not initialised"""

    status_code = 503


class InvalidPayloadError(PortfolioAPIException):
    """Raised when a request body fails schema validation"""

    status_code = 400


class MissingIdentifierError(PortfolioAPIException):
    """Raised when PUT/DELETE is called without an _id"""

    status_code = 400


class DocumentNotFoundError(PortfolioAPIException):
    status_code = 404


class SingletonExistsError(PortfolioAPIException):
    """Raised when creating a second document of a singleton resource"""

    status_code = 400


class UploadError(PortfolioAPIException):
    status_code = 400
