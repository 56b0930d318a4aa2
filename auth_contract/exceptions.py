from typing import Optional


class HarnessError(Exception):
    """Base class for harness failures."""


class ContractViolation(HarnessError):
    """The target answered, but not the way the contract requires."""

    def __init__(self, step: str, message: str, status_code: Optional[int] = None, body: Optional[str] = None):
        self.step = step
        self.message = message
        self.status_code = status_code
        self.body = body
        detail = f"{step}: {message}"
        if status_code is not None:
            detail += f" (status={status_code}, body={body!r})"
        super().__init__(detail)


class PreconditionViolation(HarnessError):
    """The target environment is not in the state the run assumes."""


class ScenarioOrderError(HarnessError):
    """A step reads state that no earlier step writes."""
