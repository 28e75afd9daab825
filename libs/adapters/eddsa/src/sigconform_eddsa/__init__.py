"""EdDSA adapters backed by `cryptography`. Importing registers them."""

from . import eddsa_adapter as _eddsa_adapter  # noqa: F401

__all__: list[str] = []
