from __future__ import annotations

from typing import Iterable, Sequence

from app.domain.entities.service_catalog import ServiceOption


def format_price(price_cents: int) -> str:
    return f"${price_cents / 100:,.2f}"


def find_service(text: str, services: Sequence[ServiceOption]) -> ServiceOption | None:
    """
    Resolve free text to a catalog entry.
    Rules: exact id, exact name, containment either way. The first entry in
    catalog order that satisfies any rule wins.
    """
    normalized = " ".join(text.lower().split())
    if not normalized:
        return None

    for service in services:
        service_id = service.id.lower()
        service_name = service.name.lower()
        if normalized == service_id or normalized == service_name:
            return service
        if service_id in normalized or service_name in normalized:
            return service
        if normalized in service_id or normalized in service_name:
            return service
    return None


def list_services_summary(services: Iterable[ServiceOption]) -> str:
    return "\n".join(
        f"{service.name} — {service.duration_minutes} min, {format_price(service.price_cents)}"
        for service in services
    )
