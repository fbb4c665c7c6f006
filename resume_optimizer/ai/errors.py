from __future__ import annotations


class ModelError(RuntimeError):
    def __init__(self, message: str, *, code: str = "model_error"):
        super().__init__(message)
        self.code = code


class ModelUnavailableError(ModelError):
    """The model could not be reached or is not configured."""


class ModelResponseError(ModelError):
    """The model answered, but not with the contracted JSON shape."""
