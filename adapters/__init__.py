"""
Adapters package - External service connections.
OpenAI for meal analysis, Stripe for payments, local disk for meal images.
"""

from adapters import openai_adapter, stripe_adapter, image_storage

__all__ = [
    "openai_adapter",
    "stripe_adapter",
    "image_storage",
]
