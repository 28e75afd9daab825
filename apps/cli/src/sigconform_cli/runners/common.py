from __future__ import annotations
"""Shared helpers for CLI commands.

Includes adapter bootstrap, scheme construction (byte-level adapters are
wrapped in the buffer bridge) and JSON export of suite reports.
"""

import json
import logging
import pathlib
import sys
from typing import Any, Dict, Iterable, Optional

from sigconform import ByteSchemeBinding, SignatureScheme, SuiteReport, registry

log = logging.getLogger(__name__)

_HERE = pathlib.Path(__file__).resolve()

try:
    _PROJECT_ROOT = next(p for p in _HERE.parents if (p / "libs").exists())
except StopIteration:
    _PROJECT_ROOT = _HERE.parents[0]

_ADAPTER_PATHS = {
    "sigconform_eddsa": _PROJECT_ROOT / "libs" / "adapters" / "eddsa" / "src",
    "sigconform_liboqs": _PROJECT_ROOT / "libs" / "adapters" / "liboqs" / "src",
    "sigconform_native": _PROJECT_ROOT / "libs" / "adapters" / "native" / "src",
}

_ADAPTER_INSTANCE_CACHE: Dict[str, SignatureScheme] = {}


def _load_adapters() -> None:
    import importlib, importlib.util
    for mod in ("sigconform_eddsa", "sigconform_liboqs"):
        spec = importlib.util.find_spec(mod)
        if spec is None:
            candidate = _ADAPTER_PATHS.get(mod)
            if candidate and candidate.exists():
                if str(candidate) not in sys.path:
                    sys.path.append(str(candidate))
                spec = importlib.util.find_spec(mod)
        if spec is None:
            log.warning("[adapter optional] %s not installed", mod)
            continue
        try:
            importlib.import_module(mod)
        except Exception as e:
            log.warning("[adapter import error] %s: %s", mod, e)


def as_scheme(obj: Any) -> SignatureScheme:
    """Accept either a buffer-level scheme or a byte-level adapter."""
    if hasattr(obj, "params"):
        return obj
    return ByteSchemeBinding(obj)


def get_scheme(name: str) -> SignatureScheme:
    scheme = _ADAPTER_INSTANCE_CACHE.get(name)
    if scheme is not None:
        return scheme
    factory = registry.get(name)
    scheme = as_scheme(factory())
    _ADAPTER_INSTANCE_CACHE[name] = scheme
    return scheme


def reset_adapter_cache(name: Optional[str] = None) -> None:
    """Drop cached scheme instances so env-driven overrides take effect."""
    if name is None:
        _ADAPTER_INSTANCE_CACHE.clear()
        return
    _ADAPTER_INSTANCE_CACHE.pop(name, None)


def build_export_payload(reports: Iterable[SuiteReport]) -> Dict[str, Any]:
    items = [r.to_dict() for r in reports]
    return {
        "exit_code": sum(item["exit_code"] for item in items),
        "reports": items,
    }


def export_json(reports: Iterable[SuiteReport], export_path: str | None) -> None:
    if not export_path:
        return
    # Normalize Windows-style separators on POSIX if users pass e.g. "results\file.json"
    if "\\" in export_path and ":" not in export_path:
        export_path = export_path.replace("\\", "/")
    path = pathlib.Path(export_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(build_export_payload(reports), f, indent=2)
