#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the ao3kit library.

This module defines specialized exception classes for the error conditions
that can occur while fetching chapter pages and validating options. The
document model and style walker never raise: cosmetic defects in scraped
markup degrade gracefully instead.

Exception Hierarchy
-------------------
- Ao3KitError (base exception)

  - ValidationError (parameter/option validation)

  - ParsingError (page structure not recognized)

  - FetchError (HTTP transport and archive responses)
    - InvalidStatusCodeError (non-200 responses)
    - TooManyRedirectsError (adult-content confirmation loop)
    - RestrictedWorkError (work visible to registered users only)

"""

from typing import Any


class Ao3KitError(Exception):
    """Base exception class for all ao3kit-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(Ao3KitError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class ParsingError(Ao3KitError):
    """Exception raised when a fetched page does not have the expected structure."""


class FetchError(Ao3KitError):
    """Exception raised when a page cannot be retrieved from the archive.

    Parameters
    ----------
    message : str
        Description of the failure
    url : str, optional
        URL that was being requested
    status_code : int, optional
        HTTP status code of the response, if one was received
    original_error : Exception, optional
        Underlying transport error

    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        status_code: int | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the fetch error with request details."""
        super().__init__(message, original_error=original_error)
        self.url = url
        self.status_code = status_code


class InvalidStatusCodeError(FetchError):
    """Exception raised when the archive answers with a non-200 status code."""

    def __init__(self, status_code: int, url: str | None = None, message: str | None = None):
        """Initialize with the offending status code."""
        if message is None:
            message = f"Invalid status code from AO3: {status_code}"
        super().__init__(message, url=url, status_code=status_code)


class TooManyRedirectsError(FetchError):
    """Exception raised when adult-content confirmation keeps redirecting."""

    def __init__(self, url: str | None = None):
        """Initialize with the last requested URL."""
        super().__init__("Too many redirects in adult work confirmation", url=url)


class RestrictedWorkError(FetchError):
    """Exception raised for works only available to logged-in archive users."""

    def __init__(self, url: str | None = None):
        """Initialize with the requested URL."""
        super().__init__("This work is only available to registered users", url=url)
