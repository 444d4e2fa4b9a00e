"""Errors raised while registering model APIs."""

from rev_models.errors import ConfigurationError, NotFoundError


class ApiMetadataError(ConfigurationError):
    """
    Raised when API metadata for a model is invalid.

    Examples:
    - Missing or malformed 'methods' key
    - Unknown built-in operation name
    - Custom method without an args list or handler
    - Method argument naming a field the model doesn't have
    """

    pass


class ApiNotFoundError(NotFoundError):
    """Raised when asking for the API of a model that has none registered."""

    pass
