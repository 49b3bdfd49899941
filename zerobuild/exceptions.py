"""도메인 예외"""


class ZeroBuildError(Exception):
    """모든 도메인 예외의 기본 클래스"""


class InvalidCredentialsError(ZeroBuildError):
    """로그인 정보 불일치"""


class VisualizationError(ZeroBuildError):
    """생성형 AI 서비스가 결과를 돌려주지 못한 경우"""


class ProjectNotFoundError(ZeroBuildError):
    def __init__(self, project_id: str):
        super().__init__(f"Project not found: {project_id}")
        self.project_id = project_id


class RoomNotFoundError(ZeroBuildError):
    def __init__(self, room_id: str):
        super().__init__(f"Room not found: {room_id}")
        self.room_id = room_id
