"""Tests for GoldAdapter (mocked SOAP endpoint)."""

import logging

import httpx
import pytest

from app.markets.cache import ResponseCache
from app.markets.errors import ParseError
from app.markets.gold import SOAP_ACTION, GoldAdapter, extract_inner_document, parse_rate_table
from fakes import mock_client, soap_response

ROWS = [
    {"Kod": "EC", "Aciklama": "Eski Çeyrek", "Alis": "9200", "Satis": "9500"},
    {"Kod": "C", "Aciklama": "Çeyrek", "Alis": "9340", "Satis": "9690"},
    {"Kod": "GAT", "Aciklama": "Gram Toptan", "Alis": "5780.5", "Satis": "5888.25"},
    {"Kod": "HH_T", "Aciklama": "Has Toptan", "Alis": "5800", "Satis": ""},
    {"Kod": "XYZ", "Aciklama": "Unknown", "Alis": "1", "Satis": "1"},
]


class TestExtractInnerDocument:
    """Unit tests for SOAP envelope unwrapping."""

    def test_single_escaped_payload(self):
        inner = extract_inner_document(soap_response(ROWS[:1]))
        assert inner.startswith("<Kurlar>")

    def test_double_escaped_payload(self):
        """Entities left after the first parse are unescaped before the second."""
        inner = extract_inner_document(soap_response(ROWS[:1], double_escape=True))
        assert inner.startswith("<Kurlar>")
        assert "&lt;" not in inner

    def test_fault_is_parse_error(self):
        fault = (
            '<soap:Envelope xmlns:soap="http://schemas.xmlsoap.org/soap/envelope/"><soap:Body>'
            "<soap:Fault><faultcode>soap:Client</faultcode><faultstring>bad auth</faultstring></soap:Fault>"
            "</soap:Body></soap:Envelope>"
        )
        with pytest.raises(ParseError, match="bad auth"):
            extract_inner_document(fault)

    def test_missing_result_is_parse_error(self):
        empty = '<soap:Envelope xmlns:soap="http://schemas.xmlsoap.org/soap/envelope/"><soap:Body/></soap:Envelope>'
        with pytest.raises(ParseError):
            extract_inner_document(empty)

    def test_malformed_envelope_is_parse_error(self):
        with pytest.raises(ParseError):
            extract_inner_document("<soap:Envelope><unclosed>")


class TestParseRateTable:
    """Unit tests for inner rate table parsing."""

    def test_maps_codes_and_drops_unknown(self):
        records = parse_rate_table(extract_inner_document(soap_response(ROWS)))
        assert [(r.provider_code, r.mapped_code) for r in records] == [
            ("EC", "C"),
            ("C", "C"),
            ("GAT", "GA"),
            ("HH_T", "HAS"),
        ]

    def test_missing_price_defaults_to_zero(self):
        records = parse_rate_table(extract_inner_document(soap_response(ROWS)))
        has = next(r for r in records if r.mapped_code == "HAS")
        assert has.bid == 5800.0
        assert has.ask == 0.0

    def test_row_without_code_is_skipped(self):
        records = parse_rate_table("<Kurlar><Kur><Alis>1</Alis></Kur><Kur><Kod>Y</Kod></Kur></Kurlar>")
        assert [r.mapped_code for r in records] == ["Y"]

    def test_malformed_table_is_parse_error(self):
        with pytest.raises(ParseError):
            parse_rate_table("<Kurlar><Kur>")


@pytest.mark.asyncio
class TestGoldAdapter:
    """Integration tests for GoldAdapter over a mock transport."""

    async def test_fetch_quotes_reconciles(self):
        """Test that the adapter returns reconciled, deduplicated gold quotes."""
        client = mock_client(lambda request: httpx.Response(200, text=soap_response(ROWS)))
        quotes = await GoldAdapter(client).fetch_quotes()

        assert [q.code for q in quotes] == ["C", "GA", "HAS"]
        assert quotes[0].bid == 9340.0  # retail C overwrote legacy EC
        assert quotes[1].name == "Gram Altın"
        assert all(q.change_percent == 0.0 for q in quotes)

    async def test_request_shape(self):
        """Test the SOAP POST carries the envelope and SOAPAction header."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, text=soap_response(ROWS))

        await GoldAdapter(mock_client(handler)).fetch_quotes()

        request = seen[0]
        assert request.method == "POST"
        assert request.headers["SOAPAction"] == SOAP_ACTION
        assert request.headers["Content-Type"].startswith("text/xml")
        assert b"<Username>AltinkaynakWebServis</Username>" in request.content
        assert b"<GetGold " in request.content

    async def test_fetch_records_returns_raw_rows(self):
        """Test fetch_records exposes unreconciled rows."""
        client = mock_client(lambda request: httpx.Response(200, text=soap_response(ROWS)))
        records = await GoldAdapter(client).fetch_records()
        assert [r.provider_code for r in records] == ["EC", "C", "GAT", "HH_T"]

    async def test_http_error_returns_empty(self, caplog):
        """Test that a 5xx yields an empty list and an error log."""
        client = mock_client(lambda request: httpx.Response(503))
        with caplog.at_level(logging.ERROR):
            assert await GoldAdapter(client).fetch_quotes() == []
        assert "503" in caplog.text

    async def test_garbage_body_returns_empty(self):
        """Test that a non-XML body yields an empty list."""
        client = mock_client(lambda request: httpx.Response(200, text="<html>maintenance"))
        assert await GoldAdapter(client).fetch_quotes() == []

    async def test_connect_error_returns_empty(self):
        """Test that a connection failure yields an empty list."""

        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        assert await GoldAdapter(mock_client(handler)).fetch_quotes() == []

    async def test_cached_within_window(self):
        """Test that a second call inside the freshness window does not hit the network."""
        calls = 0

        def handler(request):
            nonlocal calls
            calls += 1
            return httpx.Response(200, text=soap_response(ROWS))

        adapter = GoldAdapter(mock_client(handler), cache=ResponseCache())
        first = await adapter.fetch_quotes()
        second = await adapter.fetch_quotes()

        assert calls == 1
        assert first == second
