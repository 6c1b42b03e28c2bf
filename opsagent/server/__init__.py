"""
OpsAgent Server Package.

This package contains the web server exposing the OpsAgent control surface.

Subpackages:
    api: FastAPI route definitions and endpoint logic.
    core: Configuration and constants.
    exception_handlers: Mapping of core errors and unhandled exceptions to responses.
    services: The process-wide agent service and its FastAPI dependency.
"""
