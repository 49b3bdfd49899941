from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .routes import assistant, auth, projects, visuals
from .config import settings
from .utils.logger import logger

# 프로젝트 루트 디렉토리
BASE_DIR = Path(__file__).resolve().parent.parent
LOGS_DIR = BASE_DIR / "logs"

LOGS_DIR.mkdir(exist_ok=True)

logger.info(f"Starting {settings.app_name} v{settings.app_version}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """애플리케이션 시작/종료"""
    logger.info("="*50)
    logger.info("Application startup")
    logger.info(f"Debug mode: {settings.debug}")
    logger.info(f"Gemini API configured: {bool(settings.gemini_api_key)}")
    logger.info(f"Data directory: {settings.data_dir}")
    logger.info("="*50)
    yield
    logger.info("Application shutdown")


app = FastAPI(
    title=settings.app_name,
    description="Building plot planning, budgets and AI visualizations",
    version=settings.app_version,
    debug=settings.debug,
    lifespan=lifespan
)

# CORS 설정 (환경변수 기반)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

logger.info(f"CORS enabled for origins: {settings.cors_origins}")

# 라우터 등록
app.include_router(auth.router)
app.include_router(projects.router)
app.include_router(visuals.router)
app.include_router(assistant.router)


@app.get("/health")
async def health_check():
    """헬스 체크 및 시스템 상태"""
    return {
        "status": "healthy",
        "version": settings.app_version,
        "gemini_api_key_configured": bool(settings.gemini_api_key),
        "config": {
            "data_dir": settings.data_dir,
            "image_model": settings.image_model,
            "text_model": settings.text_model
        }
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower()
    )
