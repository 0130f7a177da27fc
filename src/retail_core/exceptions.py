"""Domain-specific exceptions for Retail Core.

This module defines custom exceptions that are part of the public API.
All exceptions inherit from RetailAPIError for easy catching.
"""


class RetailAPIError(Exception):
    """Base exception for all Retail Core errors.

    Users can catch this exception to handle any error raised by the package.
    """

    pass


class ConfigError(RetailAPIError):
    """Raised when there is a configuration error.

    This exception is raised when:
    - An empty or malformed list of date strategies is provided
    - An unknown report view is requested
    - A ranking threshold is not a positive integer
    """

    pass


class DataQualityError(RetailAPIError):
    """Raised when a table cannot be used as loaded.

    This exception is raised when:
    - Required columns are missing from an input table
    - A dimension table (customers, products) has duplicate identifiers
    """

    pass


class ETLError(RetailAPIError):
    """Raised when a pipeline stage fails.

    This exception is raised when:
    - Writing the fact table or a report view fails
    - A stage cannot complete for a reason other than bad rows
    """

    pass


class LoadError(ETLError):
    """Raised when a source file exists but cannot be parsed as delimited text."""

    pass
