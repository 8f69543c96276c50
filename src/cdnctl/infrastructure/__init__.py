"""Infrastructure layer: registry, blob store, bindings, remote fetch.

This layer depends on stdlib, the domain layer, and third-party libs
(python-magic, httpx). It must never import from services, commands,
or output. The service layer bridges between callers and infrastructure.
"""
