class InvalidProblemError(ValueError):
    """Raised when problem data cannot be solved as given (shape mismatch, bad values)."""
