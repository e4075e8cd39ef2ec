from __future__ import annotations

import re
from datetime import date
from typing import Iterable, Sequence

from app.application.exceptions import InvalidConfigurationError
from app.core.config import Settings
from app.domain.entities.assistant_config import AssistantConfig
from app.domain.entities.service_catalog import ServiceOption
from app.domain.entities.working_hours import WorkingHours
from app.infrastructure.knowledge.service_catalog_data import SERVICE_CATALOG

_HHMM_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def build_assistant_config(
    settings: Settings,
    services: Sequence[ServiceOption] | None = None,
) -> AssistantConfig:
    """Assemble and validate the read-only assistant configuration."""
    catalog = tuple(services if services is not None else SERVICE_CATALOG)
    _validate_catalog(catalog)

    hours = WorkingHours(
        open=settings.WORKING_HOURS_OPEN,
        close=settings.WORKING_HOURS_CLOSE,
        days_open=frozenset(settings.WORKING_DAYS_OPEN),
    )
    _validate_hours(hours)

    return AssistantConfig(
        business_name=settings.BUSINESS_NAME,
        owner_name=settings.OWNER_NAME,
        location=settings.BUSINESS_LOCATION,
        contact_email=settings.CONTACT_EMAIL,
        phone=settings.BUSINESS_PHONE,
        services=catalog,
        working_hours=hours,
        timezone=settings.BUSINESS_TIMEZONE,
        slot_minutes=settings.SLOT_MINUTES,
        blackout_dates=_validate_blackout_dates(settings.BLACKOUT_DATES),
    )


def _validate_catalog(catalog: tuple[ServiceOption, ...]) -> None:
    if not catalog:
        raise InvalidConfigurationError("Service catalog must contain at least one service.")
    seen: set[str] = set()
    for service in catalog:
        if service.id in seen:
            raise InvalidConfigurationError(f"Duplicate service id: {service.id}")
        if service.duration_minutes <= 0:
            raise InvalidConfigurationError(f"Service {service.id} must have a positive duration.")
        seen.add(service.id)


def _validate_hours(hours: WorkingHours) -> None:
    for value in (hours.open, hours.close):
        if not _HHMM_PATTERN.match(value):
            raise InvalidConfigurationError(f"Working hours must be zero-padded HH:MM, got {value!r}")
    if hours.open >= hours.close:
        raise InvalidConfigurationError("Working hours must open before they close.")
    if not hours.days_open or any(day not in range(7) for day in hours.days_open):
        raise InvalidConfigurationError("Open days must be weekday numbers 0 (Sunday) to 6 (Saturday).")


def _validate_blackout_dates(values: Iterable[str]) -> frozenset[str]:
    dates: set[str] = set()
    for value in values:
        try:
            dates.add(date.fromisoformat(value).isoformat())
        except ValueError as e:
            raise InvalidConfigurationError(f"Invalid blackout date: {value!r}") from e
    return frozenset(dates)
