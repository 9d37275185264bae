"""Gold instrument reconciliation.

Altinkaynak reports some coins twice: once under the retail code (``C``) and
once under a legacy code (``EC``). Both map to the same canonical instrument,
so the rows are merged with a last-non-legacy-wins rule:

    - first row for a code is inserted wherever it appears
    - a later non-legacy row overwrites it in place
    - a later legacy row never overwrites anything
"""

from __future__ import annotations

from collections.abc import Iterable

from .models import Category, Quote, RawInstrumentRecord

LEGACY_PREFIX = "E"


def is_legacy(provider_code: str) -> bool:
    """True for legacy-variant provider codes (``EC``, ``EY``, ``ET``)."""
    return provider_code.startswith(LEGACY_PREFIX)


def reconcile_gold_records(records: Iterable[RawInstrumentRecord]) -> list[Quote]:
    """Collapse raw gold rows into one quote per canonical code, in first-seen order."""
    merged: dict[str, Quote] = {}
    for record in records:
        quote = Quote(
            code=record.mapped_code,
            name=record.name,
            category=Category.GOLD,
            bid=record.bid,
            ask=record.ask,
            change_percent=0.0,  # Altinkaynak does not report change
        )
        if record.mapped_code not in merged or not is_legacy(record.provider_code):
            merged[record.mapped_code] = quote
    return list(merged.values())
