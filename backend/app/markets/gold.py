"""Altinkaynak SOAP client for gold prices."""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from xml.sax.saxutils import unescape

from .errors import ParseError, SchemaMismatch
from .instruments import GOLD_CODE_MAP
from .interface import MarketDataProvider, to_float
from .models import Quote, RawInstrumentRecord
from .reconcile import reconcile_gold_records

logger = logging.getLogger(__name__)

ALTINKAYNAK_URL = "http://data.altinkaynak.com/DataService.asmx"
SOAP_ACTION = "http://data.altinkaynak.com/GetGold"

SOAP_ENVELOPE = """<?xml version="1.0" encoding="utf-8"?>
<soap:Envelope xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance" xmlns:xsd="http://www.w3.org/2001/XMLSchema" xmlns:soap="http://schemas.xmlsoap.org/soap/envelope/">
  <soap:Header>
    <AuthHeader xmlns="http://data.altinkaynak.com/">
      <Username>AltinkaynakWebServis</Username>
      <Password>AltinkaynakWebServis</Password>
    </AuthHeader>
  </soap:Header>
  <soap:Body>
    <GetGold xmlns="http://data.altinkaynak.com/" />
  </soap:Body>
</soap:Envelope>"""

_ENTITIES = {"&quot;": '"'}
_XML_DECLARATION = re.compile(r"^\s*<\?xml[^>]*\?>")


def _local(tag: str) -> str:
    """Strip an ElementTree ``{namespace}`` prefix."""
    return tag.rsplit("}", 1)[-1]


def _find(element: ET.Element, name: str) -> ET.Element | None:
    """First descendant (or self) whose local tag is ``name``."""
    for node in element.iter():
        if _local(node.tag) == name:
            return node
    return None


def _child_text(element: ET.Element, name: str) -> str | None:
    for child in element:
        if _local(child.tag) == name:
            return (child.text or "").strip()
    return None


def extract_inner_document(envelope_xml: str | bytes) -> str:
    """Pull the escaped rate table out of a GetGold SOAP response."""
    try:
        root = ET.fromstring(envelope_xml)
    except ET.ParseError as e:
        raise ParseError(f"malformed SOAP envelope: {e}") from e

    fault = _find(root, "Fault")
    if fault is not None:
        reason = _child_text(fault, "faultstring") or "unknown fault"
        raise ParseError(f"SOAP fault: {reason}")

    result = _find(root, "GetGoldResult")
    if result is None or not (result.text or "").strip():
        raise ParseError("SOAP envelope has no GetGoldResult payload")

    inner = result.text.strip()
    # The parser decodes one level of escaping; some responses carry a second
    if inner.startswith("&lt;"):
        inner = unescape(inner, _ENTITIES)
    # Inner declarations may claim an encoding (utf-16) the str no longer has
    return _XML_DECLARATION.sub("", inner, count=1)


def parse_rate_table(inner_xml: str) -> list[RawInstrumentRecord]:
    """Parse ``<Kurlar><Kur>...</Kur></Kurlar>`` into raw records, dropping unmapped codes."""
    try:
        root = ET.fromstring(inner_xml)
    except ET.ParseError as e:
        raise ParseError(f"malformed rate table: {e}") from e

    records: list[RawInstrumentRecord] = []
    for row in root.iter():
        if _local(row.tag) != "Kur":
            continue
        try:
            records.append(_parse_row(row))
        except SchemaMismatch as e:
            logger.debug("Skipping gold row: %s", e)
    return records


def _parse_row(row: ET.Element) -> RawInstrumentRecord:
    code = _child_text(row, "Kod")
    if not code:
        raise SchemaMismatch("row without Kod")
    mapping = GOLD_CODE_MAP.get(code)
    if mapping is None:
        raise SchemaMismatch(f"unmapped code {code!r}")
    mapped_code, name = mapping
    return RawInstrumentRecord(
        provider_code=code,
        mapped_code=mapped_code,
        name=name,
        bid=to_float(_child_text(row, "Alis")),
        ask=to_float(_child_text(row, "Satis")),
    )


class GoldAdapter(MarketDataProvider):
    """Gold quotes from the Altinkaynak SOAP data service.

    One POST of a fixed, pre-authenticated envelope returns the full rate table
    as an XML document escaped inside the SOAP body. Rows are mapped through
    GOLD_CODE_MAP and merged by ``reconcile_gold_records``.
    """

    name = "altinkaynak"
    default_deadline = 10.0

    def __init__(self, client, *, url: str = ALTINKAYNAK_URL, **kwargs) -> None:
        super().__init__(client, url=url, **kwargs)

    async def fetch_records(self) -> list[RawInstrumentRecord]:
        """Raw, unreconciled rows. Raises ProviderError on failure."""
        response = await self._request(
            "POST",
            content=SOAP_ENVELOPE.encode("utf-8"),
            headers={
                "Content-Type": "text/xml; charset=utf-8",
                "SOAPAction": SOAP_ACTION,
            },
        )
        inner = extract_inner_document(response.content)
        return parse_rate_table(inner)

    async def _fetch(self) -> list[Quote]:
        return reconcile_gold_records(await self.fetch_records())
