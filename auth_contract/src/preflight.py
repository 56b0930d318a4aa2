"""
Environment preflight.

Run before the scenario to tell an unprepared target apart from a contract
violation. An unreachable target or an administrator identity that cannot log
in raises PreconditionViolation. Over HTTP alone an absent administrator and
one seeded with other credentials look the same, so both are reported as
"cannot log in".
"""

import httpx
from ..exceptions import PreconditionViolation
from ..helper.actions import login
from ..helper.utils import setup_logging
from ..models.models import Identities

logger = setup_logging() # initialize logger


async def check_environment(client: httpx.AsyncClient, identities: Identities):
    try:
        response = await client.get("/users")
        logger.info(f"target {client.base_url} answered {response.status_code} on /users")
        token = await login(client, identities.admin)
    except httpx.RequestError as e:
        logger.error(f"target {client.base_url} cannot be queried: {e!r}")
        raise PreconditionViolation(f"target {client.base_url} cannot be queried: {e!r}") from e

    if not token:
        logger.error(f"administrator {identities.admin.email} cannot log in")
        raise PreconditionViolation(
            f"administrator identity {identities.admin.email} cannot log in; "
            "the target must be seeded with it before the run"
        )
    logger.info("environment preflight passed")
