class FormatConversionError(Exception):
    """Raised when an analysis cannot be converted to or from a wire format."""
