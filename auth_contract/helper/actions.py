import httpx
from ..models.models import HttpOutcome, Identity
from .utils import setup_logging

logger = setup_logging() # initialize logger


def bearer(token: str) -> dict:
    # no session, no Authorization header: the request goes out unauthenticated
    if not token:
        return {}
    return {"Authorization": f"Bearer {token}"}


async def register(client: httpx.AsyncClient, identity: Identity) -> HttpOutcome:
    """Submit a registration request; the caller decides what success means."""
    payload = identity.registration_payload()
    if not all(payload.values()):
        raise ValueError("email, username and password are required to register")
    response = await client.post("/register", json=payload)
    return HttpOutcome.from_response(response)


async def login(client: httpx.AsyncClient, identity: Identity) -> str:
    """
    Log in with email and password and return the issued bearer token.

    A rejected login is an expected outcome, not an error: any non-2xx answer
    yields an empty string. A 2xx answer whose body does not carry a string
    `token` also yields an empty string, so the asserting step sees the same
    signal. Transport errors are not caught here.
    """
    response = await client.post("/login", json=identity.login_payload())
    if not response.is_success:
        logger.info(f"login rejected for {identity.email}: {response.status_code}")
        return ""
    try:
        token = response.json().get("token")
    except (ValueError, AttributeError):
        logger.warning(f"login for {identity.email} returned an undecodable body: {response.text!r}")
        return ""
    if not isinstance(token, str):
        logger.warning(f"login for {identity.email} returned no token: {response.text!r}")
        return ""
    return token
