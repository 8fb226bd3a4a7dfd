from datetime import UTC, datetime

from app.core.config import Settings
from app.schemas.health import HealthResponse, ParserHealthResponse
from app.services.agenda_models import EventKind
from app.services.agenda_parser import parse_command

_SAMPLE_MESSAGE = "me lembra de pagar a conta às 14h amanhã"
_EXPECTED_START_TIME = "14:00"


class HealthService:
    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    def get_status(self) -> HealthResponse:
        return HealthResponse(
            status="ok",
            service=self.settings.app_name,
            version=self.settings.app_version,
            agenda_store=self.settings.agenda_store,
            timestamp=datetime.now(UTC),
        )

    def get_parser_status(self) -> ParserHealthResponse:
        event = parse_command(
            _SAMPLE_MESSAGE,
            reference_instant=datetime.now(UTC),
            tz_offset_minutes=self.settings.default_tz_offset_minutes,
        )
        healthy = event.start_time == _EXPECTED_START_TIME and event.kind == EventKind.reminder
        return ParserHealthResponse(
            status="ok" if healthy else "degraded",
            sample_message=_SAMPLE_MESSAGE,
            expected_start_time=_EXPECTED_START_TIME,
            parsed_start_time=event.start_time,
            parsed_kind=event.kind.value,
        )
