"""
Engine error taxonomy.

NotReady and MalformedInput are request-scoped failures; an empty training
set is not an error (it yields the Insufficient Data result).
"""
from typing import Any, Dict, List, Optional


class EngineError(Exception):
    """Base class for all disease risk engine errors."""

    retryable: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": str(self),
            "retryable": self.retryable,
        }


class ModelNotReadyError(EngineError):
    """A query reached a model that is not Ready."""

    retryable = True

    def __init__(self, model: str, state: str):
        self.model = model
        self.state = state
        if state == "loading":
            message = f"{model} model is still loading"
        else:
            message = f"{model} model has not been loaded (state: {state})"
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update({"model": self.model, "state": self.state})
        return data


class MalformedInputError(EngineError, ValueError):
    """A query failed validation; only the offending request is affected."""

    def __init__(self, message: str, details: Optional[List[str]] = None):
        self.details = details or []
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["details"] = self.details
        return data
