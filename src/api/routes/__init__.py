"""HTTP routes, the inbound adapters of the service.

- routes/elevenlabs/: voice-agent tool-call webhooks
- routes/health/: health and readiness probes
- router.py: registers every router on the app
"""

from __future__ import annotations

from api.routes.router import create_api_router

__all__ = ["create_api_router"]
