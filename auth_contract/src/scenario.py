"""
Contract scenario: the ordered verification steps and the engine that runs them.

Every step is an async function taking a RunContext. Steps declare the run
state they read (`requires`) and write (`provides`); a Scenario refuses to be
built if a step reads something no earlier step writes. Steps run strictly one
after another; a failing step is reported and the next one still runs.
"""

import uuid
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Iterable, List, Optional, Tuple
import httpx
from ..exceptions import ContractViolation, PreconditionViolation, ScenarioOrderError
from ..helper.actions import bearer, login, register
from ..helper.utils import setup_logging
from ..models.models import (
    HttpOutcome,
    Identities,
    Identity,
    RunState,
    Verdict,
    VERDICT_CONTRACT,
    VERDICT_PRECONDITION,
    VERDICT_TRANSPORT,
)

logger = setup_logging() # initialize logger

USER_ACCOUNT = "user_account"
USER_TOKEN = "user_token"
ADMIN_TOKEN = "admin_token"


@dataclass
class RunContext:
    client: httpx.AsyncClient
    identities: Identities
    state: RunState
    target_user_id: str = "1"


@dataclass(frozen=True)
class Step:
    name: str
    func: Callable[[RunContext], Awaitable[None]]
    requires: Tuple[str, ...] = ()
    provides: Tuple[str, ...] = ()


class Scenario:
    """An ordered, dependency-checked list of steps."""

    def __init__(self, steps: Iterable[Step]):
        self.steps: Tuple[Step, ...] = tuple(steps)
        self._validate()

    def _validate(self):
        available = set()
        names = set()
        for step in self.steps:
            if step.name in names:
                raise ScenarioOrderError(f"duplicate step name: {step.name}")
            names.add(step.name)
            missing = [key for key in step.requires if key not in available]
            if missing:
                raise ScenarioOrderError(
                    f"step {step.name} requires {', '.join(missing)} before any step provides it"
                )
            available.update(step.provides)

    def __iter__(self):
        return iter(self.steps)

    def __len__(self):
        return len(self.steps)

    @property
    def names(self) -> List[str]:
        return [step.name for step in self.steps]

    def get(self, name: str) -> Step:
        for step in self.steps:
            if step.name == name:
                return step
        raise KeyError(name)

    async def run(self, ctx: RunContext) -> List[Verdict]:
        verdicts = []
        for step in self.steps:
            verdicts.append(await run_step(step, ctx))
        return verdicts


async def run_step(step: Step, ctx: RunContext) -> Verdict:
    """Run one step and classify its outcome."""
    logger.info(f"running step {step.name}")
    try:
        await step.func(ctx)
    except ContractViolation as e:
        return Verdict(step=step.name, passed=False, category=VERDICT_CONTRACT, detail=str(e))
    except PreconditionViolation as e:
        logger.error(f"{step.name}: precondition violated: {e}")
        return Verdict(step=step.name, passed=False, category=VERDICT_PRECONDITION, detail=str(e))
    except httpx.TransportError as e:
        logger.error(f"{step.name}: transport failure: {e!r}")
        return Verdict(step=step.name, passed=False, category=VERDICT_TRANSPORT, detail=repr(e))
    except httpx.RequestError as e:
        # the target answered, but with a response httpx could not read
        logger.error(f"{step.name}: malformed response: {e!r}")
        return Verdict(step=step.name, passed=False, category=VERDICT_CONTRACT, detail=repr(e))
    logger.info(f"step {step.name} passed")
    return Verdict(step=step.name, passed=True)


# assertion helpers

def expect(step: str, condition: bool, message: str, outcome: Optional[HttpOutcome] = None):
    if condition:
        return
    if outcome is not None:
        logger.error(f"{step} failed: {message} - {outcome.status_code} {outcome.body}")
        raise ContractViolation(step, message, outcome.status_code, outcome.body)
    logger.error(f"{step} failed: {message}")
    raise ContractViolation(step, message)


def expect_status(step: str, outcome: HttpOutcome, status_code: int):
    expect(step, outcome.status_code == status_code, f"expected status {status_code}", outcome)


def decode_body(step: str, outcome: HttpOutcome) -> Any:
    try:
        return outcome.json()
    except ValueError:
        expect(step, False, "response body is not JSON", outcome)


async def get(ctx: RunContext, path: str, token: Optional[str] = None) -> HttpOutcome:
    headers = bearer(token) if token is not None else None
    response = await ctx.client.get(path, headers=headers)
    return HttpOutcome.from_response(response)


# core sequence

async def register_user(ctx: RunContext):
    outcome = await register(ctx.client, ctx.identities.user)
    expect("register_user", outcome.ok, "registration was not accepted", outcome)


async def login_user(ctx: RunContext):
    ctx.state.user_token = await login(ctx.client, ctx.identities.user)
    expect("login_user", ctx.state.user_token != "", "token is empty")


async def login_admin(ctx: RunContext):
    # the administrator is seeded on the target, never registered here
    ctx.state.admin_token = await login(ctx.client, ctx.identities.admin)
    expect("login_admin", ctx.state.admin_token != "", "token is empty")


async def user_forbidden_from_users(ctx: RunContext):
    outcome = await get(ctx, "/users", ctx.state.user_token)
    # exactly 403: 401 or 5xx would hide a different failure class
    expect_status("user_forbidden_from_users", outcome, 403)


async def admin_lists_users(ctx: RunContext):
    outcome = await get(ctx, "/users", ctx.state.admin_token)
    expect("admin_lists_users", outcome.ok, "admin was refused the user list", outcome)
    body = decode_body("admin_lists_users", outcome)
    expect("admin_lists_users", isinstance(body, list), "user list is not a list", outcome)


async def _profile_names_owner(step: str, ctx: RunContext, token: str, username: str):
    outcome = await get(ctx, "/user/profile", token)
    expect(step, outcome.ok, "profile request was refused", outcome)
    profile = decode_body(step, outcome)
    expect(step, isinstance(profile, dict), "profile is not an object", outcome)
    expect(step, profile.get("Username") == username, f"profile username is not {username}", outcome)


async def user_reads_own_profile(ctx: RunContext):
    await _profile_names_owner("user_reads_own_profile", ctx, ctx.state.user_token, ctx.identities.user.username)


CORE_STEPS = (
    Step("register_user", register_user, provides=(USER_ACCOUNT,)),
    Step("login_user", login_user, requires=(USER_ACCOUNT,), provides=(USER_TOKEN,)),
    Step("login_admin", login_admin, provides=(ADMIN_TOKEN,)),
    Step("user_forbidden_from_users", user_forbidden_from_users, requires=(USER_TOKEN,)),
    Step("admin_lists_users", admin_lists_users, requires=(ADMIN_TOKEN,)),
    Step("user_reads_own_profile", user_reads_own_profile, requires=(USER_TOKEN,)),
)


# extended sequence

async def duplicate_registration_rejected(ctx: RunContext):
    outcome = await register(ctx.client, ctx.identities.user)
    expect("duplicate_registration_rejected", not outcome.ok, "duplicate registration was accepted", outcome)


async def wrong_password_yields_empty_token(ctx: RunContext):
    user = ctx.identities.user
    wrong = user.model_copy(update={"password": user.password + "-wrong"})
    token = await login(ctx.client, wrong)
    expect("wrong_password_yields_empty_token", token == "", "login with a wrong password issued a token")


async def unknown_identity_yields_empty_token(ctx: RunContext):
    stranger = ctx.identities.user.model_copy(
        update={"email": f"unknown_{uuid.uuid4().hex[:8]}@example.com"}
    )
    token = await login(ctx.client, stranger)
    expect("unknown_identity_yields_empty_token", token == "", "login for an unknown identity issued a token")


async def incomplete_registration_rejected(ctx: RunContext):
    response = await ctx.client.post("/register", json={"email": "", "username": "", "password": ""})
    outcome = HttpOutcome.from_response(response)
    expect("incomplete_registration_rejected", not outcome.ok, "registration with empty fields was accepted", outcome)


async def profile_requires_token(ctx: RunContext):
    outcome = await get(ctx, "/user/profile")
    expect("profile_requires_token", not outcome.ok, "profile served without a token", outcome)


async def invalid_token_rejected(ctx: RunContext):
    for path in ("/users", "/user/profile"):
        outcome = await get(ctx, path, "invalidtoken")
        expect("invalid_token_rejected", not outcome.ok, f"{path} accepted an invalid token", outcome)


async def admin_reads_own_profile(ctx: RunContext):
    await _profile_names_owner("admin_reads_own_profile", ctx, ctx.state.admin_token, ctx.identities.admin.username)


async def user_forbidden_from_admin_operations(ctx: RunContext):
    user_id = ctx.target_user_id
    headers = bearer(ctx.state.user_token)
    requests = [
        ("GET", "/roles", None),
        ("POST", f"/users/{user_id}/assign-role", {"role_id": "1"}),
        ("POST", f"/users/{user_id}/reset-password", {"new_password": "pw789"}),
        ("DELETE", f"/users/{user_id}", None),
    ]
    for method, path, payload in requests:
        response = await ctx.client.request(method, path, json=payload, headers=headers)
        outcome = HttpOutcome.from_response(response)
        expect(
            "user_forbidden_from_admin_operations",
            outcome.status_code == 403,
            f"{method} {path} expected status 403",
            outcome,
        )


async def change_password_requires_current_password(ctx: RunContext):
    response = await ctx.client.post(
        "/user/change-password",
        json={"old_password": ctx.identities.user.password + "-wrong", "new_password": "pw999"},
        headers=bearer(ctx.state.user_token),
    )
    outcome = HttpOutcome.from_response(response)
    expect("change_password_requires_current_password", not outcome.ok, "password changed without the current password", outcome)


async def user_cannot_update_other_accounts(ctx: RunContext):
    response = await ctx.client.put(
        f"/users/{ctx.target_user_id}",
        json={"username": "hacker"},
        headers=bearer(ctx.state.user_token),
    )
    outcome = HttpOutcome.from_response(response)
    expect("user_cannot_update_other_accounts", not outcome.ok, "another account was updated", outcome)


async def _fresh_session(step: str, ctx: RunContext) -> Tuple[Identity, str]:
    # a throwaway account, so the fixed identities stay untouched
    suffix = uuid.uuid4().hex[:8]
    identity = Identity(email=f"fresh_{suffix}@example.com", username=f"fresh_{suffix}", password="pw123")
    outcome = await register(ctx.client, identity)
    expect(step, outcome.ok, "registration of a fresh account was not accepted", outcome)
    token = await login(ctx.client, identity)
    expect(step, token != "", "token is empty")
    return identity, token


async def profile_update_is_visible(ctx: RunContext):
    step = "profile_update_is_visible"
    identity, token = await _fresh_session(step, ctx)
    renamed = identity.username + "_renamed"
    response = await ctx.client.put("/user/profile", json={"username": renamed}, headers=bearer(token))
    outcome = HttpOutcome.from_response(response)
    expect(step, outcome.ok, "profile update was refused", outcome)
    await _profile_names_owner(step, ctx, token, renamed)


async def password_change_takes_effect(ctx: RunContext):
    step = "password_change_takes_effect"
    identity, token = await _fresh_session(step, ctx)
    response = await ctx.client.post(
        "/user/change-password",
        json={"old_password": identity.password, "new_password": "pw456"},
        headers=bearer(token),
    )
    outcome = HttpOutcome.from_response(response)
    expect(step, outcome.ok, "password change was refused", outcome)
    changed = identity.model_copy(update={"password": "pw456"})
    expect(step, await login(ctx.client, changed) != "", "login with the new password failed")
    expect(step, await login(ctx.client, identity) == "", "login with the old password still works")


EXTENDED_STEPS = (
    Step("duplicate_registration_rejected", duplicate_registration_rejected, requires=(USER_ACCOUNT,)),
    Step("wrong_password_yields_empty_token", wrong_password_yields_empty_token, requires=(USER_ACCOUNT,)),
    Step("unknown_identity_yields_empty_token", unknown_identity_yields_empty_token),
    Step("incomplete_registration_rejected", incomplete_registration_rejected),
    Step("profile_requires_token", profile_requires_token),
    Step("invalid_token_rejected", invalid_token_rejected),
    Step("admin_reads_own_profile", admin_reads_own_profile, requires=(ADMIN_TOKEN,)),
    Step("user_forbidden_from_admin_operations", user_forbidden_from_admin_operations, requires=(USER_TOKEN,)),
    Step("change_password_requires_current_password", change_password_requires_current_password, requires=(USER_TOKEN,)),
    Step("user_cannot_update_other_accounts", user_cannot_update_other_accounts, requires=(USER_TOKEN,)),
    Step("profile_update_is_visible", profile_update_is_visible),
    Step("password_change_takes_effect", password_change_takes_effect),
)

CORE_SCENARIO = Scenario(CORE_STEPS)
FULL_SCENARIO = Scenario(CORE_STEPS + EXTENDED_STEPS)
