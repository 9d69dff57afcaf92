"""Current-user endpoint."""

from fastapi import APIRouter, Depends

from src.storefront.api.http.deps import get_authenticated_user
from src.storefront.entities.core.user import User

router = APIRouter(tags=["user"])


@router.get("/user", response_model=User)
async def current_user(user: User = Depends(get_authenticated_user)) -> User:
    """Return the signed-in user."""
    return user
