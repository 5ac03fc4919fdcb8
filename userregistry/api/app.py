"""FastAPI web application for userregistry."""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from userregistry.api.user_models import CreateUserRequest, UserResponse
from userregistry.core.errors import DuplicateEmail, InvalidInput, StoreUnavailable
from userregistry.core.registry import UserRegistry
from userregistry.database.database import get_db, init_db
from userregistry.database.user_repository import UserRepository
from userregistry.logging_config import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging and make sure the schema exists before serving."""
    configure_logging(os.getenv("LOG_LEVEL", "INFO"))
    init_db()
    yield


app = FastAPI(
    title="userregistry API",
    description="Creates users identified by a unique email address",
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(request: Request, exc: RequestValidationError):
    """Report unparseable bodies as 400, like any other invalid input."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


def get_user_registry(db: Session = Depends(get_db)) -> UserRegistry:
    """Build a registry bound to the request's database session."""
    return UserRegistry(UserRepository(db))


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "version": "0.1.0"}


@app.post("/users", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(payload: CreateUserRequest, registry: UserRegistry = Depends(get_user_registry)):
    """Create a user with a unique email."""
    try:
        user = registry.create_user(payload.email, payload.name)
    except InvalidInput as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except DuplicateEmail as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except StoreUnavailable:
        logger.exception("User store unavailable")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="User store unavailable",
        )
    return UserResponse(**user.model_dump())


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
