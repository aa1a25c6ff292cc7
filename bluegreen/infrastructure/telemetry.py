"""
OpenTelemetry Tracing

Architectural Intent:
- Exports sequencer spans (one per forward or compensating action) to an
  OTLP-compatible backend
- Tracing stays a no-op until an endpoint is configured

Security:
- Endpoint defaults to empty string (must be explicitly configured)
- Non-localhost http:// endpoints rejected unless insecure=True
"""

from __future__ import annotations
from urllib.parse import urlparse
import logging

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource, SERVICE_NAME
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

from bluegreen.domain.errors import ConfigurationError
from bluegreen.infrastructure.config import TelemetryConfig

logger = logging.getLogger(__name__)


def validate_endpoint(endpoint: str, insecure: bool) -> None:
    parsed = urlparse(endpoint)
    is_localhost = parsed.hostname in ("localhost", "127.0.0.1", "::1")
    if parsed.scheme == "http" and not is_localhost and not insecure:
        raise ConfigurationError(
            f"Non-localhost HTTP endpoint '{endpoint}' requires "
            "insecure=True or use https://."
        )


def configure_tracing(config: TelemetryConfig) -> bool:
    """Install an OTLP span exporter. Returns False when tracing stays off."""
    if not config.endpoint:
        logger.debug("OTEL endpoint not configured, tracing disabled")
        return False

    validate_endpoint(config.endpoint, config.insecure)

    provider = TracerProvider(
        resource=Resource(attributes={SERVICE_NAME: config.service_name})
    )
    provider.add_span_processor(
        BatchSpanProcessor(
            OTLPSpanExporter(endpoint=config.endpoint, insecure=config.insecure)
        )
    )
    trace.set_tracer_provider(provider)
    logger.info("Exporting traces to %s", config.endpoint)
    return True
