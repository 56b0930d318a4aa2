from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from . import auth_token
from ..config.store import ADMIN_ROLE, User, UserStore

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/login")

def get_store(request: Request) -> UserStore:
    return request.app.state.store


def get_current_user(data: str = Depends(oauth2_scheme), store: UserStore = Depends(get_store)) -> User:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    user_id = auth_token.decode_token(data, credentials_exception)
    try:
        user = store.users.get(int(user_id))
    except ValueError:
        raise credentials_exception
    if user is None:
        raise credentials_exception
    return user


def require_admin(user: User = Depends(get_current_user), store: UserStore = Depends(get_store)) -> User:
    if store.role_name(user) != ADMIN_ROLE:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin role required")
    return user
