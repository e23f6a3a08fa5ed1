"""API, the edge layer.

Responsibilities:
- Receive voice-agent tool calls
- Decode and validate request bodies
- Render results as JSON or plain text

Subpackages:
- connectors/: decoding of inbound payloads per caller
- routes/: HTTP endpoints (webhooks, health)

MUST NOT contain: availability rules, catalog caching or response wording.
"""
