from datetime import datetime, timezone
from fastapi import APIRouter, Depends, HTTPException, status
from ..config.store import USER_ROLE, User, UserStore
from ..helper import auth_token
from ..helper.hashing import Hash
from ..helper.oauth2 import get_current_user, get_store, require_admin
from ..models import models
from ..helper.utils import setup_logging

users_router = APIRouter(tags=["users"]) # create a router for users

logger = setup_logging() # initialize logger


def _lookup(store: UserStore, user_id: int) -> User:
    user = store.users.get(user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


@users_router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(data: models.register, store: UserStore = Depends(get_store)):
    if not data.email or not data.username or not data.password:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email, username and password are required")
    if store.find_by_email(data.email) or store.find_by_username(data.username):
        logger.info(f"duplicate registration for {data.email}")
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="User already exists")
    user = store.add_user(data.username, data.email, data.password, store.ensure_role(USER_ROLE))
    logger.info(f"registered user {user.id} ({data.email})")
    return user.to_json()


@users_router.post("/login", status_code=status.HTTP_200_OK)
async def login(data: models.login, store: UserStore = Depends(get_store)):
    user = store.find_by_email(data.email)
    if user is None or not await Hash.verify(user.hashed_password, data.password):
        logger.info(f"invalid login attempt for {data.email}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    user.last_seen = datetime.now(timezone.utc)
    logger.info(f"user {user.id} logged in")
    return {"token": auth_token.create_access_token(data={"sub": str(user.id)})}


@users_router.get("/user/profile", status_code=status.HTTP_200_OK)
async def profile(user: User = Depends(get_current_user)):
    return user.to_json()


@users_router.put("/user/profile", status_code=status.HTTP_200_OK)
async def update_profile(data: models.update_profile, user: User = Depends(get_current_user), store: UserStore = Depends(get_store)):
    if data.username:
        owner = store.find_by_username(data.username)
        if owner is not None and owner.id != user.id:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Username already taken")
        user.username = data.username
    if data.email:
        owner = store.find_by_email(data.email)
        if owner is not None and owner.id != user.id:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already taken")
        user.email = data.email
    logger.info(f"user {user.id} updated their profile")
    return user.to_json()


@users_router.post("/user/change-password", status_code=status.HTTP_200_OK)
async def change_password(data: models.change_password, user: User = Depends(get_current_user)):
    if not await Hash.verify(user.hashed_password, data.old_password):
        logger.info(f"user {user.id} gave a wrong current password")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Current password is incorrect")
    if not data.new_password:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="New password is required")
    user.hashed_password = Hash.bcrypt(data.new_password)
    logger.info(f"user {user.id} changed their password")
    return {"message": "Password changed"}


@users_router.get("/users", status_code=status.HTTP_200_OK)
async def list_users(admin: User = Depends(require_admin), store: UserStore = Depends(get_store)):
    return [user.to_json() for user in store.list_users()]


@users_router.get("/roles", status_code=status.HTTP_200_OK)
async def list_roles(admin: User = Depends(require_admin), store: UserStore = Depends(get_store)):
    return [role.to_json() for role in store.roles.values()]


@users_router.post("/users/{user_id}/assign-role", status_code=status.HTTP_200_OK)
async def assign_role(user_id: int, data: models.assign_role, admin: User = Depends(require_admin), store: UserStore = Depends(get_store)):
    user = _lookup(store, user_id)
    try:
        role = store.roles.get(int(data.role_id))
    except ValueError:
        role = None
    if role is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Role not found")
    user.role_id = role.id
    logger.info(f"admin {admin.id} assigned role {role.name} to user {user.id}")
    return user.to_json()


@users_router.post("/users/{user_id}/reset-password", status_code=status.HTTP_200_OK)
async def reset_password(user_id: int, data: models.reset_password, admin: User = Depends(require_admin), store: UserStore = Depends(get_store)):
    user = _lookup(store, user_id)
    if not data.new_password:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="New password is required")
    user.hashed_password = Hash.bcrypt(data.new_password)
    logger.info(f"admin {admin.id} reset the password of user {user.id}")
    return {"message": "Password reset"}


@users_router.delete("/users/{user_id}", status_code=status.HTTP_200_OK)
async def delete_user(user_id: int, admin: User = Depends(require_admin), store: UserStore = Depends(get_store)):
    user = _lookup(store, user_id)
    del store.users[user.id]
    logger.info(f"admin {admin.id} deleted user {user.id}")
    return {"message": "User deleted"}
