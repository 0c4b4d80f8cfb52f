"""
OpenTelemetry context propagation for AWS SNS and SQS

This package carries distributed-tracing context across an SNS topic → SQS queue hop:

1. Carriers: message-attribute injector (SNS publish side) and extractor (SQS receive side)
   usable by any OpenTelemetry text-map propagator
2. Envelope unwrapping: recovers the application payload from raw or SNS-enveloped SQS bodies
3. Consumer loop: long-poll receive, per-message consumer span, delete-on-success, fixed backoff
4. Publisher: producer span, context injection and publish with retry

Trace context always travels out-of-band in the outer message attributes, never in the body.
"""

__version__ = "0.1.0"
