class InversionWarning(UserWarning):
    """Emitted when arc-length inversion stops at the iteration cap."""

    pass
