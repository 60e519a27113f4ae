from infill_eval.providers.cartesia.client import CartesiaClient

__all__ = ["CartesiaClient"]
