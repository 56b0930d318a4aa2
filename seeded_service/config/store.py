"""
In-memory user and role storage for the seeded reference service.

Every store starts from a fresh seed: an `admin` role, a `user` role and the
administrator account holding the admin role. Nothing outlives the process.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional
from ..helper.hashing import Hash

ADMIN_ROLE = "admin"
USER_ROLE = "user"


@dataclass
class Role:
    id: int
    name: str

    def to_json(self) -> dict:
        return {"ID": self.id, "Name": self.name}


@dataclass
class User:
    id: int
    username: str
    email: str
    hashed_password: str
    role_id: int
    last_seen: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_json(self) -> dict:
        return {
            "ID": self.id,
            "Username": self.username,
            "Email": self.email,
            "RoleID": self.role_id,
            "LastSeen": self.last_seen.isoformat(),
        }


class UserStore:
    def __init__(self):
        self.users: Dict[int, User] = {}
        self.roles: Dict[int, Role] = {}
        self._next_user_id = 1
        self._next_role_id = 1

    def ensure_role(self, name: str) -> Role:
        for role in self.roles.values():
            if role.name == name:
                return role
        role = Role(id=self._next_role_id, name=name)
        self.roles[role.id] = role
        self._next_role_id += 1
        return role

    def role_name(self, user: User) -> Optional[str]:
        role = self.roles.get(user.role_id)
        return role.name if role else None

    def find_by_email(self, email: str) -> Optional[User]:
        for user in self.users.values():
            if user.email == email:
                return user
        return None

    def find_by_username(self, username: str) -> Optional[User]:
        for user in self.users.values():
            if user.username == username:
                return user
        return None

    def add_user(self, username: str, email: str, password: str, role: Role) -> User:
        user = User(
            id=self._next_user_id,
            username=username,
            email=email,
            hashed_password=Hash.bcrypt(password),
            role_id=role.id,
        )
        self.users[user.id] = user
        self._next_user_id += 1
        return user

    def list_users(self) -> List[User]:
        return list(self.users.values())


def seed_store(admin_email: str = "admin@example.com", admin_username: str = "admin", admin_password: str = "adminpass") -> UserStore:
    store = UserStore()
    admin_role = store.ensure_role(ADMIN_ROLE)
    store.ensure_role(USER_ROLE)
    store.add_user(admin_username, admin_email, admin_password, admin_role)
    return store
