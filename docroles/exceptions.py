"""
Exception classes for docroles.

All docroles exceptions inherit from DocRolesError,
making it easy to catch all library errors.

Classifiers never let these escape for malformed input: they are raised
internally (e.g. while coercing a record into a TextElement) and turned
into degraded "not-X" results at the classifier boundary.

Example:
    >>> try:
    ...     element = TextElement.from_mapping(42)
    ... except docroles.InvalidElementError as e:
    ...     print(f"Bad element: {e}")
"""


class DocRolesError(Exception):
    """
    Base exception for all docroles errors.

    Catch this to handle any docroles-specific error.
    """

    pass


class InvalidElementError(DocRolesError):
    """
    Raised when an element is not a well-formed key/value record.

    Example:
        >>> TextElement.from_mapping(None)
        InvalidElementError: Element must be a mapping or TextElement, got NoneType
    """

    pass


class InvalidMetricsError(DocRolesError):
    """
    Raised when document metrics cannot be interpreted.

    Only raised by DocumentMetrics.from_mapping(strict=True). The default
    path substitutes documented defaults instead.
    """

    pass


class ConfigurationError(DocRolesError, ValueError):
    """
    Raised for invalid configuration.

    Example:
        >>> ParagraphSettings(weights=(0.5, 0.5, 0.5))
        ConfigurationError: paragraph weights must sum to 1.0, got 1.5
    """

    pass
