import os
from dataclasses import dataclass
from dotenv import load_dotenv
from ..models.models import Identity, Identities

load_dotenv()


@dataclass
class ContractConfig:
    """Run configuration for the contract harness."""
    base_url: str = "http://localhost:8080"
    timeout: float = 30.0  # seconds per request
    target_user_id: str = "1"  # account the admin-only operations are aimed at

    @classmethod
    def from_env(cls) -> "ContractConfig":
        return cls(
            base_url=os.getenv("CONTRACT_BASE_URL", cls.base_url),
            timeout=float(os.getenv("CONTRACT_TIMEOUT", cls.timeout)),
            target_user_id=os.getenv("CONTRACT_TARGET_USER_ID", cls.target_user_id),
        )


def load_identities() -> Identities:
    # admin is seeded on the target out-of-band, the ordinary user is created by the run
    user = Identity(
        email=os.getenv("CONTRACT_USER_EMAIL", "testuser@example.com"),
        username=os.getenv("CONTRACT_USER_USERNAME", "testuser"),
        password=os.getenv("CONTRACT_USER_PASSWORD", "testpass"),
    )
    admin = Identity(
        email=os.getenv("CONTRACT_ADMIN_EMAIL", "admin@example.com"),
        username=os.getenv("CONTRACT_ADMIN_USERNAME", "admin"),
        password=os.getenv("CONTRACT_ADMIN_PASSWORD", "adminpass"),
    )
    return Identities(user=user, admin=admin)
