"""인증 게이트 (데모 수준)

평문 비교, 해시/만료 없음. 운영 환경용이 아니다.
세션은 메모리에만 있고 재시작하면 사라진다.
"""
import uuid
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from ..config import settings
from ..exceptions import InvalidCredentialsError
from ..models.domain import Account, Project, UserRole
from ..utils.logger import logger
from .storage_service import StorageService


class Session(ABC):
    """로그인한 사용자 컨텍스트 (역할별 하위 클래스)"""

    role: UserRole
    can_edit: bool = False
    can_view_portfolio: bool = False

    def __init__(self, email: str):
        self.email = email
        self.session_id = uuid.uuid4().hex

    @abstractmethod
    def visible_projects(self, storage: StorageService) -> List[Project]:
        """이 세션이 볼 수 있는 프로젝트"""

    @abstractmethod
    def can_view(self, project: Project) -> bool:
        """단일 프로젝트 접근 가능 여부"""


class ClientSession(Session):
    """본인 프로젝트만 보고 수정"""

    role = UserRole.CLIENT
    can_edit = True

    def visible_projects(self, storage: StorageService) -> List[Project]:
        return [p for p in storage.get_projects() if p.client_id == self.email]

    def can_view(self, project: Project) -> bool:
        return project.client_id == self.email


class DeveloperSession(Session):
    """전체 프로젝트 읽기 전용"""

    role = UserRole.DEVELOPER
    can_view_portfolio = True

    def visible_projects(self, storage: StorageService) -> List[Project]:
        return storage.get_projects()

    def can_view(self, project: Project) -> bool:
        return True


def signup_client(storage: StorageService, email: str, password: str) -> ClientSession:
    """가입 즉시 로그인 (중복 email은 조용히 무시)"""
    storage.save_account(Account(email=email, password=password, role=UserRole.CLIENT))
    logger.info(f"Client signed up: {email}")
    return ClientSession(email)


def login_client(storage: StorageService, email: str, password: str) -> ClientSession:
    found = any(
        a.email == email and a.password == password
        for a in storage.get_accounts()
    ) or (email == settings.demo_client_email and password == settings.demo_client_password)

    if not found:
        logger.warning(f"Client login rejected: {email}")
        raise InvalidCredentialsError(
            "Invalid client credentials. Please sign up if you don't have an account."
        )
    return ClientSession(email)


def login_developer(email: str, password: str) -> DeveloperSession:
    """관리자 계정 하나만 허용 (가입 경로 없음)"""
    if email != settings.admin_email or password != settings.admin_password:
        logger.warning(f"Developer login rejected: {email}")
        raise InvalidCredentialsError("Invalid developer credentials")
    return DeveloperSession(email)


class SessionRegistry:
    """session_id -> Session (메모리 전용)"""

    def __init__(self):
        self._sessions: Dict[str, Session] = {}

    def open(self, session: Session) -> Session:
        self._sessions[session.session_id] = session
        logger.info(f"Session opened: {session.role.value} {session.email}")
        return session

    def get(self, session_id: Optional[str]) -> Optional[Session]:
        if not session_id:
            return None
        return self._sessions.get(session_id)

    def close(self, session_id: str) -> None:
        session = self._sessions.pop(session_id, None)
        if session:
            logger.info(f"Session closed: {session.email}")

    def clear(self) -> None:
        self._sessions.clear()


# 전역 세션 레지스트리
session_registry = SessionRegistry()
