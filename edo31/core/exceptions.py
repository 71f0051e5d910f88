"""
Custom exceptions for the 31-EDO scale engine.
"""


class Edo31Error(Exception):
    """Base exception for all engine errors."""
    
    def __init__(self, message: str, code: str = "EDO31_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class ScaleInvariantError(Edo31Error):
    """A generated scale breaks the degree/interval invariants."""
    
    def __init__(self, message: str) -> None:
        super().__init__(message, code="SCALE_INVARIANT_ERROR")


class GenerationError(Edo31Error):
    """Scale family generation errors."""
    
    def __init__(self, message: str) -> None:
        super().__init__(message, code="GENERATION_ERROR")


class CatalogueError(Edo31Error):
    """Catalogue serialization errors."""
    
    def __init__(self, message: str) -> None:
        super().__init__(message, code="CATALOGUE_ERROR")


class ValidationError(Edo31Error):
    """Query input validation errors."""
    
    def __init__(self, message: str) -> None:
        super().__init__(message, code="VALIDATION_ERROR")
