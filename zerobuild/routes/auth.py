from fastapi import APIRouter, Depends, Header, HTTPException

from ..exceptions import InvalidCredentialsError
from ..models.domain import UserRole
from ..models.schemas import LoginRequest, SessionResponse, SignupRequest
from ..services.auth_service import (
    Session,
    login_client,
    login_developer,
    session_registry,
    signup_client,
)
from ..services.storage_service import StorageService, get_storage_service
from .deps import get_session

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _session_response(session: Session) -> SessionResponse:
    return SessionResponse(session_id=session.session_id, role=session.role, email=session.email)


@router.post("/signup", response_model=SessionResponse)
async def signup(request: SignupRequest, storage: StorageService = Depends(get_storage_service)):
    """클라이언트 가입 후 바로 로그인"""
    session = session_registry.open(signup_client(storage, request.email, request.password))
    return _session_response(session)


@router.post("/login", response_model=SessionResponse)
async def login(request: LoginRequest, storage: StorageService = Depends(get_storage_service)):
    """역할별 로그인"""
    try:
        if request.role == UserRole.DEVELOPER:
            session = login_developer(request.email, request.password)
        else:
            session = login_client(storage, request.email, request.password)
    except InvalidCredentialsError as e:
        raise HTTPException(status_code=401, detail=str(e))

    return _session_response(session_registry.open(session))


@router.post("/logout")
async def logout(x_session_id: str = Header(...)):
    session_registry.close(x_session_id)
    return {"success": True}


@router.get("/me", response_model=SessionResponse)
async def me(session: Session = Depends(get_session)):
    return _session_response(session)
