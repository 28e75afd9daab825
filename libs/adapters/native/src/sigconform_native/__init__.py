from __future__ import annotations

from ._core import NativeSchemeError, load_library, symbol_name
from .scheme import NativeScheme

__all__ = ["NativeScheme", "NativeSchemeError", "load_library", "symbol_name"]
