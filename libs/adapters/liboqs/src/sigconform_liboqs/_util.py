from __future__ import annotations
import os
from typing import Any, Dict, Optional, Sequence


def try_import_oqs():
    try:
        import oqs  # type: ignore
        return oqs
    except Exception:
        return None


def pick_sig_algorithm(oqs_mod, env_var: str, candidates: Sequence[str]) -> Optional[str]:
    """
    Choose a SIG mechanism by attempting instantiation, so we do not depend
    on which helper lists a given liboqs-python release exposes.
    Honors the env override first.
    """
    order: list[str] = []
    env_val = os.getenv(env_var)
    if env_val:
        order.append(env_val)
    order += [c for c in candidates if c != env_val]
    for name in order:
        try:
            with oqs_mod.Signature(name):
                return name
        except Exception:
            continue
    return None


def sig_details(oqs_mod, alg: str) -> Dict[str, Any]:
    with oqs_mod.Signature(alg) as s:
        return dict(s.details)
