from __future__ import annotations

from app.domain.entities.service_catalog import ServiceOption

# Catalog order is the tie-break when free text matches more than one service.
SERVICE_CATALOG: tuple[ServiceOption, ...] = (
    ServiceOption(
        id="bridal",
        name="Bridal Glam",
        description="Full bridal makeup including lashes and touch-up kit.",
        duration_minutes=120,
        price_cents=35000,
    ),
    ServiceOption(
        id="party",
        name="Party Glam",
        description="Event-ready glam suitable for parties or nights out.",
        duration_minutes=90,
        price_cents=22000,
    ),
    ServiceOption(
        id="natural",
        name="Natural Beat",
        description="Soft, natural makeup for daytime or headshots.",
        duration_minutes=60,
        price_cents=15000,
    ),
    ServiceOption(
        id="trial",
        name="Bridal Trial",
        description="Trial session to find your perfect bridal look.",
        duration_minutes=75,
        price_cents=18000,
    ),
)
