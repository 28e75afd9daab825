"""Adapter package for liboqs-backed signature schemes.

Importing submodules registers the adapters when liboqs-python is importable;
otherwise nothing is registered and the CLI simply does not list them.
"""

from . import sig_adapters as _sig_adapters  # noqa: F401

__all__: list[str] = []
