"""API dependencies: acting user, provider and feed state."""
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from tepi.core.config import settings
from tepi.core.security import decode_token
from tepi.services.feed_state import FeedState, FeedStateRegistry
from tepi.services.providers import FeedProvider

security = HTTPBearer(auto_error=False)


def get_provider(request: Request) -> FeedProvider:
    return request.app.state.provider


def get_registry(request: Request) -> FeedStateRegistry:
    return request.app.state.feed_states


async def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    provider: FeedProvider = Depends(get_provider),
) -> str:
    if credentials:
        payload = decode_token(credentials.credentials)
        sub = payload.get("sub") if payload and payload.get("type") == "access" else None
        if sub:
            return str(sub)
    elif provider.mode == "demo":
        # Demo mode has no auth service; everyone acts as the demo user
        return settings.DEMO_USER_ID
    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authenticated",
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_feed_state(
    user_id: str = Depends(get_current_user_id),
    registry: FeedStateRegistry = Depends(get_registry),
) -> FeedState:
    return registry.get(user_id)
