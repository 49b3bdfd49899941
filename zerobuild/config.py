"""애플리케이션 설정"""
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """환경변수 기반 설정"""

    # API Keys
    gemini_api_key: str = ""

    # Application
    app_name: str = "ZeroBuild Planning API"
    app_version: str = "1.0.0"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # CORS
    cors_origins: List[str] = ["http://localhost:3000", "http://localhost:5173"]

    # Storage (accounts.json / projects.json 저장 위치)
    data_dir: str = "data"

    # Gemini API (모델 ID는 프로토콜이 아니라 설정)
    text_model: str = "gemini-3-pro-preview"
    fast_model: str = "gemini-3-flash-preview"
    image_model: str = "gemini-2.5-flash-image"
    image_aspect_ratio: str = "16:9"

    # 데모용 계정 (평문 비교, 운영 환경 사용 금지)
    admin_email: str = "admin@zerobuild.ai"
    admin_password: str = "admin123"
    demo_client_email: str = "client@zerobuild.ai"
    demo_client_password: str = "client123"

    # Logging
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = False


# 전역 설정 인스턴스
settings = Settings()
