from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from egghunt.api.error import raise_for_error
from egghunt.app.use_cases.sessions import SessionLifecycleUseCase
from egghunt.depends import get_session_lifecycle
from egghunt.domain.entities import Session, SessionTermination

router = APIRouter(tags=["Sessions"])


class StartSessionRequest(BaseModel):
    """Request to start a session after a successful login"""

    user_id: int = Field(..., description="Logged in user")
    remember_me: bool = Field(False, description="Long-lived session")


class ExtendSessionRequest(BaseModel):
    days: float = Field(..., description="Days added to the current expiry, may be negative")


class UpdateSessionDataRequest(BaseModel):
    data: Optional[str] = Field(..., description="Opaque session data, replaces the old value")


class EndUserSessionsRequest(BaseModel):
    termination: SessionTermination = Field(
        ..., description="deactivate keeps the rows, erase deletes them"
    )


class SessionResponse(BaseModel):
    session_id: str
    user_id: int
    created_at: datetime
    expires_at: datetime
    is_active: bool
    is_valid: bool
    data: str

    @classmethod
    def from_entity(cls, session: Session) -> "SessionResponse":
        return cls(
            session_id=session.id,
            user_id=session.user_id,
            created_at=session.created_at,
            expires_at=session.expires_at,
            is_active=session.is_active,
            is_valid=session.is_valid(),
            data=session.data,
        )


class EndSessionResponse(BaseModel):
    session_id: str
    deleted: bool


class EndUserSessionsResponse(BaseModel):
    message: str
    user_id: int
    termination: SessionTermination
    count: int


@router.post(
    "/sessions",
    status_code=status.HTTP_201_CREATED,
    response_model=SessionResponse,
)
async def start_session(
    request: StartSessionRequest,
    use_case: SessionLifecycleUseCase = Depends(get_session_lifecycle),
):
    """
    Start Session

    Raises:
        - 404 Not Found: User not found
    """
    result = await use_case.start_session(request.user_id, request.remember_me)
    if result.is_err():
        raise_for_error(result.error)
    return SessionResponse.from_entity(result.value)


@router.get(
    "/sessions/{session_id}",
    status_code=status.HTTP_200_OK,
    response_model=SessionResponse,
)
async def check_session(
    session_id: str,
    use_case: SessionLifecycleUseCase = Depends(get_session_lifecycle),
):
    """
    Check Session

    Raises:
        - 401 Unauthorized: Session inactive or expired
        - 404 Not Found: Session not found
    """
    result = await use_case.check_session(session_id)
    if result.is_err():
        raise_for_error(result.error)
    return SessionResponse.from_entity(result.value)


@router.post(
    "/sessions/{session_id}/extend",
    status_code=status.HTTP_200_OK,
    response_model=SessionResponse,
)
async def extend_session(
    session_id: str,
    request: ExtendSessionRequest,
    use_case: SessionLifecycleUseCase = Depends(get_session_lifecycle),
):
    result = await use_case.extend_session(session_id, request.days)
    if result.is_err():
        raise_for_error(result.error)
    return SessionResponse.from_entity(result.value)


@router.post(
    "/sessions/{session_id}/deactivate",
    status_code=status.HTTP_200_OK,
    response_model=SessionResponse,
)
async def deactivate_session(
    session_id: str,
    use_case: SessionLifecycleUseCase = Depends(get_session_lifecycle),
):
    result = await use_case.deactivate_session(session_id)
    if result.is_err():
        raise_for_error(result.error)
    return SessionResponse.from_entity(result.value)


@router.put(
    "/sessions/{session_id}/data",
    status_code=status.HTTP_200_OK,
    response_model=SessionResponse,
)
async def update_session_data(
    session_id: str,
    request: UpdateSessionDataRequest,
    use_case: SessionLifecycleUseCase = Depends(get_session_lifecycle),
):
    """
    Replace Session Data

    Raises:
        - 400 Bad Request: data is null
        - 404 Not Found: Session not found
    """
    result = await use_case.update_session_data(session_id, request.data)
    if result.is_err():
        raise_for_error(result.error)
    return SessionResponse.from_entity(result.value)


@router.delete(
    "/sessions/{session_id}",
    status_code=status.HTTP_200_OK,
    response_model=EndSessionResponse,
)
async def end_session(
    session_id: str,
    use_case: SessionLifecycleUseCase = Depends(get_session_lifecycle),
):
    """
    End Session (logout)

    Deleting a session that no longer exists is not an error.
    """
    result = await use_case.end_session(session_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post(
    "/users/{user_id}/sessions/end",
    status_code=status.HTTP_200_OK,
    response_model=EndUserSessionsResponse,
)
async def end_user_sessions(
    user_id: int,
    request: EndUserSessionsRequest,
    use_case: SessionLifecycleUseCase = Depends(get_session_lifecycle),
):
    """
    End All Sessions Of A User

    - deactivate: log out everywhere, sessions stay for history
    - erase: delete the sessions, for data removal requests
    """
    result = await use_case.end_all_sessions_for_user(user_id, request.termination)
    if result.is_err():
        raise_for_error(result.error)

    data = result.value
    verb = "deactivated" if request.termination == SessionTermination.deactivate else "deleted"
    return {
        "message": f"Successfully {verb} {data['count']} session(s)",
        "user_id": data["user_id"],
        "termination": data["termination"],
        "count": data["count"],
    }
