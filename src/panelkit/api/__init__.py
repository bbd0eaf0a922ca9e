"""HTTP API."""

from panelkit.api.app import create_app

__all__ = ["create_app"]
