"""
SSR Server — server-side request handling for a server-rendering web app.

Application package root. This is a modular monolith using
hexagonal architecture (ports & adapters).

Bounded contexts:
    - http: Error classification, hook chains, diagnostics, error-boundary rendering.

Layers:
    - domain: Pure error taxonomy, value objects, classification, ports (ABCs).
    - application: Use cases and orchestration.
    - infrastructure: Adapters (asset manifest, templates) implementing domain ports.
    - interfaces: FastAPI routers, Pydantic schemas, the reply builder.
    - shared: Cross-cutting concerns (errors, logging, serialization).
"""
