"""FastAPI application factory."""

from fastapi import FastAPI

from user_management.api.users import router as users_router
from user_management.app_logging import configure_logging
from user_management.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()

    app = FastAPI()
    app.state.container = container

    app.include_router(users_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
