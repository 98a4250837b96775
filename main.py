"""
Root application entry point for the Vend API facade
====================================================

This module exposes the FastAPI application instance defined in
``vend_api/main.py`` so that deployment tools like Uvicorn can import
``main:app`` from the repository root.

Usage
-----

.. code-block:: bash

    VEND_TOKEN=... VEND_DOMAIN_PREFIX=mystore uvicorn main:app --port 8000

The command line client is installed as ``vend-api``.
"""

from vend_api.main import app  # noqa: F401 re-export for Uvicorn

__all__ = ["app"]
