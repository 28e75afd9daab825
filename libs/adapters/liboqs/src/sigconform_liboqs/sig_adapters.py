from __future__ import annotations
from typing import Sequence, Tuple
from sigconform import registry
from ._util import try_import_oqs, pick_sig_algorithm, sig_details

_oqs = try_import_oqs()


class _OqsSignature:
    """Byte-level adapter over `oqs.Signature`.

    Sizes come from the mechanism details; signatures of several liboqs
    schemes (Falcon, MAYO) are shorter than the declared maximum, so the
    combined encoding carries a length prefix.
    """
    name = ""
    label = ""
    env_var = ""
    candidates: Sequence[str] = ()
    variable_signature_length = True

    def __init__(self) -> None:
        if _oqs is None:
            raise RuntimeError("liboqs-python (oqs) is not installed")
        alg = pick_sig_algorithm(_oqs, self.env_var, self.candidates)
        if not alg:
            raise RuntimeError(f"No supported {self.label} algorithm enabled in liboqs")
        details = sig_details(_oqs, alg)
        self.algorithm = alg
        self.public_key_bytes = int(details["length_public_key"])
        self.secret_key_bytes = int(details["length_secret_key"])
        self.signature_bytes = int(details["length_signature"])

    def keygen(self) -> Tuple[bytes, bytes]:
        with _oqs.Signature(self.algorithm) as s:
            pk = s.generate_keypair()
            sk = s.export_secret_key()
            return pk, sk

    def sign(self, secret_key: bytes, message: bytes) -> bytes:
        with _oqs.Signature(self.algorithm, secret_key=secret_key) as s:
            return s.sign(message)

    def verify(self, public_key: bytes, message: bytes, signature: bytes) -> bool:
        with _oqs.Signature(self.algorithm) as v:
            return v.verify(message, signature, public_key)


if _oqs is not None:
    @registry.register("ml-dsa")
    class MLDSA(_OqsSignature):
        name = "ml-dsa"
        label = "ML-DSA/Dilithium"
        env_var = "SIGCONFORM_MLDSA_ALG"
        candidates = ("ML-DSA-65", "ML-DSA-44", "ML-DSA-87", "Dilithium2", "Dilithium3", "Dilithium5")

    @registry.register("falcon")
    class Falcon(_OqsSignature):
        name = "falcon"
        label = "Falcon"
        env_var = "SIGCONFORM_FALCON_ALG"
        candidates = ("Falcon-512", "Falcon-1024")

    @registry.register("sphincs+")
    class SphincsPlus(_OqsSignature):
        name = "sphincs+"
        label = "SPHINCS+"
        env_var = "SIGCONFORM_SPHINCS_ALG"
        candidates = (
            "SPHINCS+-SHA2-128f-simple",
            "SPHINCS+-SHAKE-128f-simple",
            "SPHINCS+-SHA2-128s-simple",
            "SPHINCS+-SHAKE-128s-simple",
        )

    @registry.register("mayo")
    class Mayo(_OqsSignature):
        name = "mayo"
        label = "MAYO"
        env_var = "SIGCONFORM_MAYO_ALG"
        candidates = ("MAYO-2", "MAYO-1", "MAYO-3", "MAYO-5")
