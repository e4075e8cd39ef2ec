from __future__ import annotations

from dataclasses import dataclass

from app.domain.entities.service_catalog import ServiceOption
from app.domain.entities.working_hours import WorkingHours


@dataclass(frozen=True)
class AssistantConfig:
    business_name: str
    owner_name: str
    location: str
    contact_email: str
    services: tuple[ServiceOption, ...]
    working_hours: WorkingHours
    timezone: str = "America/Los_Angeles"  # informational only
    slot_minutes: int = 30  # informational only
    blackout_dates: frozenset[str] = frozenset()
    phone: str | None = None

    def get_service(self, service_id: str) -> ServiceOption | None:
        for service in self.services:
            if service.id == service_id:
                return service
        return None
