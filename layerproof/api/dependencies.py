from __future__ import annotations

from fastapi import Request

from layerproof.config import RelaySettings, get_settings
from layerproof.core import LayerProof


def get_app_settings(request: Request) -> RelaySettings:
    return getattr(request.app.state, "settings", None) or get_settings()


def get_checker(request: Request) -> LayerProof:
    """Return the application's ``LayerProof``, creating it on first use."""
    checker: LayerProof | None = getattr(request.app.state, "checker", None)
    if checker is None:
        checker = LayerProof(settings=get_app_settings(request))
        request.app.state.checker = checker
    return checker
