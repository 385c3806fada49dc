"""Exceptions raised by the viewer core."""


class ViewerError(Exception):
    """Base class for all viewer errors."""


class InvalidParameterError(ViewerError, ValueError):
    """Raised when a camera, transform or render parameter is unusable."""


class ObjReaderError(ViewerError, ValueError):
    """Raised when OBJ content cannot be parsed."""

    def __init__(self, message: str, line: int = 0):
        self.line = line
        super().__init__(f"Error parsing OBJ file on line {line}: {message}")
