from ._invalid_input_error import InvalidInputError


class DegreeError(InvalidInputError):
    """Raised when degree is invalid for given control point count."""

    pass
