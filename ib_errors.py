"""
Error taxonomy for the generalized bottleneck curve tracer.

Fatal errors (invalid parameters, degenerate distributions) reject a whole
request before any numeric work. Search and solver failures are recoverable:
the tracer turns them into approximate curve points instead of aborting.
"""

from typing import Optional


class BottleneckError(Exception):
    """Base class for every error raised by the curve tracer."""


class InvalidParameterError(BottleneckError, ValueError):
    """A configuration field violates its constraint."""

    def __init__(self, field: str, constraint: str):
        self.field = field
        self.constraint = constraint
        super().__init__(f"BottleCurve: {field} {constraint}")

    def __reduce__(self):
        return type(self), (self.field, self.constraint)


class DegenerateDistributionError(BottleneckError, ValueError):
    """The joint distribution cannot produce finite curve bounds."""


class SearchDidNotConvergeError(BottleneckError, RuntimeError):
    """
    A beta search exhausted its iteration or time budget.

    Carries the best candidate point found so far so the caller can keep it
    as an approximate point.
    """

    def __init__(self, target: float, beta: float, best=None, reason: str = "iteration budget exhausted"):
        self.target = target
        self.beta = beta
        self.best = best
        self.reason = reason
        super().__init__(f"Search for Hga={target:.6g} did not converge ({reason}); "
                         f"best beta={beta:.6g}")

    def __reduce__(self):
        return type(self), (self.target, self.beta, self.best, self.reason)


class SolverError(BottleneckError, RuntimeError):
    """The solver failed or returned a non-finite distribution for a beta."""

    def __init__(self, message: str, beta: Optional[float] = None, target: Optional[float] = None,
                 best=None):
        self.message = message
        self.beta = beta
        self.target = target
        self.best = best
        details = []
        if beta is not None:
            details.append(f"beta={beta:.6g}")
        if target is not None:
            details.append(f"target Hga={target:.6g}")
        if details:
            message = f"{message} ({', '.join(details)})"
        super().__init__(message)

    def __reduce__(self):
        return type(self), (self.message, self.beta, self.target, self.best)


class CurveCancelledError(BottleneckError):
    """The curve request was cancelled before it completed."""


class CurveTimeoutError(BottleneckError):
    """The curve request exceeded its wall-clock budget."""
