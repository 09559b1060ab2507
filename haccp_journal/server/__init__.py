"""
HACCP Journal Server Package.

This package contains the web server of HACCP Journal: the REST API used by
food-service owners to keep their HACCP records, and the administration API.

Subpackages:
    api: FastAPI route definitions and endpoint logic.
    core: Server configuration and constants.
    exception_handlers: Rendering of errors as ``{"error", "code"}`` bodies.
    middleware: Request logging and timing.
    services: Request dependencies, ownership checks and diary generation.
"""
