"""Mini README: HTTP interface for Canopyscan.

Exports the FastAPI application factory serving estate registration and
survey flight plans. Additional interfaces (e.g. a dashboard) should live
alongside this module.
"""

from .web_app import create_application

__all__ = ["create_application"]
