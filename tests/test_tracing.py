from __future__ import annotations

from bizops_client_sdk.tracing import REQUEST_ID_HEADER, TraceContext


def test_outgoing_headers_mint_one_id_per_context() -> None:
    trace = TraceContext()
    first = trace.outgoing_headers()[REQUEST_ID_HEADER]
    assert first
    assert trace.outgoing_headers() == {REQUEST_ID_HEADER: first}


def test_adopt_prefers_response_header_in_any_case() -> None:
    trace = TraceContext(trace_id="local")
    assert trace.adopt(headers={"x-request-id": "srv-1"}) == "srv-1"
    assert trace.outgoing_headers() == {REQUEST_ID_HEADER: "srv-1"}


def test_adopt_reads_error_body_keys_and_ignores_blanks() -> None:
    trace = TraceContext(trace_id="local")
    assert trace.adopt(payload={"trace_id": "  ", "requestId": "req-9"}) == "req-9"
    assert trace.adopt(headers={"Content-Type": "application/json"}, payload={"message": "x"}) == "req-9"
