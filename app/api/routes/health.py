from fastapi import APIRouter

from app.core.config import get_settings
from app.schemas.health import HealthResponse, ParserHealthResponse
from app.services.health_service import HealthService

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
def healthcheck() -> HealthResponse:
    service = HealthService(get_settings())
    return service.get_status()


@router.get("/parser", response_model=ParserHealthResponse)
def parser_healthcheck() -> ParserHealthResponse:
    service = HealthService(get_settings())
    return service.get_parser_status()
