from __future__ import annotations

import ctypes
import os
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

from sigconform import SchemeError


class NativeSchemeError(SchemeError):
    pass


_status = ctypes.c_int
_c_size_t = ctypes.c_size_t
_c_size_t_p = ctypes.POINTER(ctypes.c_size_t)
_c_uint8_p = ctypes.POINTER(ctypes.c_uint8)

# (suffix, argtypes without the trailing scratch pointer)
_OPERATIONS = {
    "keypair": ("crypto_sign_keypair", [_c_uint8_p, _c_uint8_p]),
    "sign": ("crypto_sign", [_c_uint8_p, _c_size_t_p, _c_uint8_p, _c_size_t, _c_uint8_p]),
    "open": ("crypto_sign_open", [_c_uint8_p, _c_size_t_p, _c_uint8_p, _c_size_t, _c_uint8_p]),
    "signature": ("crypto_sign_signature", [_c_uint8_p, _c_size_t_p, _c_uint8_p, _c_size_t, _c_uint8_p]),
    "verify": ("crypto_sign_verify", [_c_uint8_p, _c_size_t, _c_uint8_p, _c_size_t, _c_uint8_p]),
}


def _candidates(path: Optional[str]) -> Iterator[Path]:
    if path:
        yield Path(path)
    env = os.getenv("SIGCONFORM_NATIVE_LIB")
    if env:
        yield Path(env)


def load_library(path: Optional[str] = None) -> ctypes.CDLL:
    tried: list[str] = []
    for candidate in _candidates(path):
        tried.append(str(candidate))
        if candidate.is_file():
            return ctypes.CDLL(str(candidate))
    if not tried:
        raise NativeSchemeError(
            "No native library given. Pass its path or set SIGCONFORM_NATIVE_LIB to the compiled shared object."
        )
    raise NativeSchemeError(f"Unable to locate native library (tried: {', '.join(tried)})")


def symbol_name(namespace: str, suffix: str) -> str:
    return f"{namespace}_{suffix}" if namespace else suffix


def bind_operations(lib: Any, namespace: str, requires_scratch: bool) -> Dict[str, Any]:
    """Resolve the five namespaced entry points and declare their C signatures."""
    bound: Dict[str, Any] = {}
    for op, (suffix, argtypes) in _OPERATIONS.items():
        name = symbol_name(namespace, suffix)
        try:
            fn = getattr(lib, name)
        except AttributeError as exc:
            raise NativeSchemeError(f"Native library does not export {name}") from exc
        fn.argtypes = argtypes + ([_c_uint8_p] if requires_scratch else [])
        fn.restype = _status
        bound[op] = fn
    return bound


def to_uint8_ptr(address: int):
    return ctypes.cast(address, _c_uint8_p)


def new_length() -> ctypes.c_size_t:
    return ctypes.c_size_t(0)
