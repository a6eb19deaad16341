# app/core/errors.py


class TicketValidationError(ValueError):
    """
    A submitted ticket payload was rejected.

    The message is the human-readable reason returned to the client
    as `details` in the 400 response.
    """


class CatalogLoadError(RuntimeError):
    """
    The catalog source could not be read or did not contain a valid
    list of catalog items.
    """
