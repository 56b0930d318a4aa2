from fastapi import FastAPI
from seeded_service.config.store import UserStore, seed_store
from seeded_service.src.users import users_router


def create_app(store: UserStore = None) -> FastAPI:
    """Reference implementation of the auth contract, seeded with the administrator."""
    app = FastAPI(title="Seeded users service")
    app.state.store = store if store is not None else seed_store()
    app.include_router(users_router)
    return app


app = create_app()
