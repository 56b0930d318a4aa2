import json
from dataclasses import dataclass
from typing import Any, Optional
import httpx
from pydantic import BaseModel, ConfigDict, Field


class Identity(BaseModel):
    model_config = ConfigDict(frozen=True)

    email: str = Field(..., min_length=1, title="Email Address")
    username: str = Field(..., min_length=1, title="Username")
    password: str = Field(..., min_length=1, title="Password")

    def registration_payload(self) -> dict:
        return {"email": self.email, "username": self.username, "password": self.password}

    def login_payload(self) -> dict:
        # username is not part of the login contract
        return {"email": self.email, "password": self.password}


class Identities(BaseModel):
    model_config = ConfigDict(frozen=True)

    user: Identity = Field(..., title="Ordinary identity, registered by the run")
    admin: Identity = Field(..., title="Administrator identity, pre-seeded on the target")


@dataclass(frozen=True)
class HttpOutcome:
    """Status, success flag and raw body of a single response."""
    status_code: int
    ok: bool
    body: str

    @classmethod
    def from_response(cls, response: httpx.Response) -> "HttpOutcome":
        return cls(
            status_code=response.status_code,
            ok=response.is_success,
            body=response.text,
        )

    def json(self) -> Any:
        return json.loads(self.body)


@dataclass
class RunState:
    """Tokens handed from the login steps to the authorization steps.

    An empty string means no valid session. One instance per run.
    """
    user_token: str = ""
    admin_token: str = ""


VERDICT_PASSED = "passed"
VERDICT_CONTRACT = "contract"
VERDICT_TRANSPORT = "transport"
VERDICT_PRECONDITION = "precondition"


@dataclass(frozen=True)
class Verdict:
    step: str
    passed: bool
    category: str = VERDICT_PASSED
    detail: Optional[str] = None
