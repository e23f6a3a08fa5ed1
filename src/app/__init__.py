"""App, the core of the service: orchestration, use cases and infrastructure.

Subpackages:
- bootstrap/: composition root (factories, initialization, wiring)
- domain/: slot, catalog, booking and intent models
- use_cases/: voice tool-call use case
- services/: scanner, matcher, catalog cache, response composer
- infra/: HTTP client, Bookio connector, booking notifier
- protocols/: provider contracts
- observability/: correlation ids and metrics as logs

Pattern: app executes; api adapts; config configures; utils supports.
"""
