"""Tests for span exporter selection."""

from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.trace.export import ConsoleSpanExporter

from geolab.shared.telemetry.telemetry import _make_exporter


def test_none_exporter() -> None:
    assert _make_exporter("none", None) is None


def test_otlp_exporter_with_endpoint() -> None:
    assert isinstance(_make_exporter("otlp", "http://localhost:4317"), OTLPSpanExporter)


def test_otlp_without_endpoint_falls_back_to_console() -> None:
    assert isinstance(_make_exporter("otlp", None), ConsoleSpanExporter)


def test_unknown_exporter_falls_back_to_console() -> None:
    assert isinstance(_make_exporter("zipkin", None), ConsoleSpanExporter)
