import logging
import sys
from contextlib import asynccontextmanager
from typing import Dict, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api import config
from src.api.db import Database
from src.api.errors import register_error_handlers
from src.api.routes import agents, companies, customers

logger = logging.getLogger(__name__)

openapi_tags = [
    {"name": "Health", "description": "Service health checks."},
    {"name": "Customers", "description": "Customer records, including search by city."},
    {"name": "Agents", "description": "Sales agent records."},
    {"name": "Companies", "description": "Company records."},
]


def _configure_logging() -> None:
    logging.basicConfig(
        level=config.log_level(),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the connection pool once per process and close it on shutdown."""
    app.state.db.open()
    yield
    app.state.db.close()


# PUBLIC_INTERFACE
def create_app(db: Optional[Database] = None) -> FastAPI:
    """Build the API. ``db`` defaults to a Database configured from the environment."""
    _configure_logging()

    app = FastAPI(
        title="Customer API",
        description=(
            "CRUD API over the customer, agent and company tables.\n\n"
            "Request bodies are validated before any database access; every failed rule is reported with a 400."
        ),
        version="1.0.0",
        openapi_tags=openapi_tags,
        docs_url=config.DOCS_URL,
        lifespan=lifespan,
    )
    app.state.db = db if db is not None else Database()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_allow_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    app.include_router(customers.router)
    app.include_router(agents.router)
    app.include_router(companies.router)

    @app.get("/", tags=["Health"], summary="Health check")
    def health_check() -> Dict[str, str]:
        """Health check endpoint; reports whether the pool has been opened."""
        return {"message": "Healthy", "database": "open" if app.state.db.is_open else "closed"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    logger.info("App running at http://localhost:%s", config.port())
    uvicorn.run(app, host="0.0.0.0", port=config.port())
