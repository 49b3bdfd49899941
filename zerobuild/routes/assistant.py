from fastapi import APIRouter, Depends, HTTPException

from ..exceptions import VisualizationError
from ..models.schemas import ChatRequest, ChatResponse
from ..services.auth_service import Session
from ..services.project_service import PortfolioSummary, portfolio_summary
from ..services.storage_service import StorageService, get_storage_service
from ..services.visualization import VisualizationProvider
from ..utils.logger import logger
from .deps import get_session, get_visualization_provider

router = APIRouter(prefix="/api", tags=["assistant"])


@router.post("/chat", response_model=ChatResponse)
async def chat(
    request: ChatRequest,
    session: Session = Depends(get_session),
    provider: VisualizationProvider = Depends(get_visualization_provider)
):
    """플로팅 어시스턴트"""
    try:
        reply = await provider.chat(request.message, request.history)
        return ChatResponse(reply=reply)

    except VisualizationError:
        raise HTTPException(status_code=502, detail="Critical: Intelligence core link lost.")
    except Exception as e:
        logger.error(f"Chat failed: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Chat failed: {str(e)}")


@router.get("/portfolio", response_model=PortfolioSummary)
async def portfolio(
    session: Session = Depends(get_session),
    storage: StorageService = Depends(get_storage_service)
):
    """개발자 대시보드: 전체 평가액 + 만족도 분포"""
    if not session.can_view_portfolio:
        raise HTTPException(status_code=403, detail="Developer access only.")
    return portfolio_summary(session.visible_projects(storage))
