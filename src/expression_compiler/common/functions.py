"""Registered functions callable from expressions."""
from typing import Callable, List

from pydantic import BaseModel, ConfigDict, Field


# Type alias for registered callables (taking the argument list, returning a number)
ExpressionFn = Callable[[List[float]], float]


class FunctionDefinition(BaseModel):
    """A callable bound to a name, with an arity fixed at registration time."""

    model_config = ConfigDict(frozen=True)

    func: ExpressionFn = Field(..., description="Callable receiving exactly `arity` arguments as a list")
    arity: int = Field(..., ge=0, description="Number of arguments popped from the value stack")

    def __call__(self, args: List[float]) -> float:
        return float(self.func(args))
