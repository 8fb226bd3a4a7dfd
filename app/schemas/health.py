from datetime import datetime

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str = "ok"
    service: str
    version: str
    agenda_store: str
    timestamp: datetime


class ParserHealthResponse(BaseModel):
    status: str
    sample_message: str
    expected_start_time: str
    parsed_start_time: str
    parsed_kind: str
