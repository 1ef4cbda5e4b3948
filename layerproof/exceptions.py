"""Exceptions raised inside the LayerProof pipeline."""


class LayerProofError(Exception):
    """Base exception for LayerProof."""


class ProviderResponseError(LayerProofError):
    """The provider answered, but without a usable ``{"issues": [...]}`` payload."""


class InvalidRequestError(LayerProofError):
    """The incoming request does not carry a ``textLayers`` list."""
