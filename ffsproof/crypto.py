"""Core arithmetic for the non-interactive Feige-Fiat-Shamir proof.

The prover knows ``s`` with ``v = s^2 mod n`` and publishes ``(x, e, y)``:

* ``x = r^2 mod n`` for a fresh nonce ``r``
* ``e = H(x || v || n)`` read as a big-endian integer
* ``y = r * s^e mod n``

The verifier accepts when ``y^2 == x * v^e (mod n)``.

A nonce must never be used with two different challenges. Two responses
sharing ``r`` give ``s^(e2 - e1)``, and together with ``v = s^2`` that is
enough to recover ``s``.
"""

from __future__ import annotations

import hashlib
import logging
import secrets
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from .constants import DEFAULT_HASH, DEMO_MODULUS_HEX, DEMO_SECRET_HEX, MIN_DIGEST_BITS

logger = logging.getLogger(__name__)


def int_to_bytes(value: int) -> bytes:
    """Minimal big-endian encoding, at least one byte."""

    length = max(1, (value.bit_length() + 7) // 8)
    return value.to_bytes(length, "big")


def decode_hex_integer(value: object) -> int:
    """Decode a big-endian hex literal (or pass through a non-negative int)."""

    if isinstance(value, bool):
        raise ValueError("Expected a hex string or integer, not a boolean")
    if isinstance(value, int):
        if value < 0:
            raise ValueError("Value must not be negative")
        return value
    if not isinstance(value, str):
        raise ValueError("Expected a hex string or integer")

    text = "".join(value.split())
    if text[:2].lower() == "0x":
        text = text[2:]
    if not text:
        raise ValueError("Empty hex literal")
    if len(text) % 2:
        text = "0" + text
    try:
        raw = bytes.fromhex(text)
    except ValueError as exc:
        raise ValueError(f"Malformed hex literal '{value}'") from exc
    return int.from_bytes(raw, "big")


def check_hash_name(hash_name: str) -> str:
    """Ensure ``hash_name`` is a fixed-size hashlib digest of at least 256 bits."""

    try:
        digest_size = hashlib.new(hash_name).digest_size
    except ValueError as exc:
        raise ValueError(f"Unsupported hash function '{hash_name}'") from exc
    if digest_size * 8 < MIN_DIGEST_BITS:
        raise ValueError(
            f"Hash function '{hash_name}' must produce at least {MIN_DIGEST_BITS} bits"
        )
    return hash_name


@dataclass(frozen=True)
class Proof:
    """Self-contained proof transcript ``(x, e, y)``."""

    commitment: int
    challenge: int
    response: int

    def to_dict(self) -> Dict[str, str]:
        return {
            "commitment": hex(self.commitment),
            "challenge": hex(self.challenge),
            "response": hex(self.response),
        }

    @staticmethod
    def from_dict(data: Dict[str, object]) -> "Proof":
        if not isinstance(data, dict):
            raise ValueError("Proof must be a JSON object")
        values = {}
        for key in ("commitment", "challenge", "response"):
            if key not in data:
                raise ValueError(f"Proof is missing '{key}'")
            raw = data[key]
            if not isinstance(raw, str):
                raise ValueError(f"Proof field '{key}' must be a hex string")
            values[key] = decode_hex_integer(raw)
        return Proof(**values)


@dataclass(frozen=True)
class ProofSystem:
    """Public parameters ``(n, v)`` and the operations of the protocol.

    Every operation is a pure function of its arguments and the instance
    state, so one instance can be shared between threads.
    """

    modulus: int
    identity: int
    hash_name: str = DEFAULT_HASH

    def __post_init__(self) -> None:
        if self.modulus < 2:
            raise ValueError("Modulus must be greater than one")
        if not 0 <= self.identity < self.modulus:
            raise ValueError("Identity must lie in [0, modulus)")
        check_hash_name(self.hash_name)

    @classmethod
    def from_config(cls, config) -> "ProofSystem":
        return cls(
            modulus=config.modulus,
            identity=config.identity,
            hash_name=config.hash_name,
        )

    def generate_commitment(self, nonce: int) -> int:
        """Return ``nonce^2 mod n``. Callers draw ``nonce`` from ``[0, n)``."""

        return pow(nonce, 2, self.modulus)

    def compute_response(self, nonce: int, secret: int, challenge: int) -> int:
        return (nonce * pow(secret, challenge, self.modulus)) % self.modulus

    def verify(self, commitment: int, response: int, challenge: int) -> bool:
        left = pow(response, 2, self.modulus)
        right = (commitment * pow(self.identity, challenge, self.modulus)) % self.modulus
        return left == right

    def generate_challenge(self, commitment: int) -> int:
        """Fiat-Shamir challenge ``H(x || v || n)`` as a big-endian integer."""

        hasher = hashlib.new(self.hash_name)
        hasher.update(int_to_bytes(commitment))
        hasher.update(int_to_bytes(self.identity))
        hasher.update(int_to_bytes(self.modulus))
        return int.from_bytes(hasher.digest(), "big")

    def verify_proof(self, proof: Proof) -> bool:
        """Check a transcript, including that its challenge was derived honestly."""

        if proof.challenge != self.generate_challenge(proof.commitment):
            logger.info("Proof rejected: challenge does not match commitment")
            return False
        if not self.verify(proof.commitment, proof.response, proof.challenge):
            logger.info("Proof rejected: y^2 != x * v^e (mod n)")
            return False
        logger.debug("Proof accepted")
        return True


def generate_random_number_below(bound: int) -> int:
    """Uniform sample from ``[0, bound)`` using the ``secrets`` module."""

    if bound <= 0:
        raise ValueError("Bound must be positive")
    return secrets.randbelow(bound)


def get_constants() -> Tuple[int, int]:
    """Return the demonstration modulus and the identity of the demo secret."""

    modulus = int.from_bytes(bytes.fromhex(DEMO_MODULUS_HEX), "big")
    secret = int.from_bytes(bytes.fromhex(DEMO_SECRET_HEX), "big")
    return modulus, pow(secret, 2, modulus)


def create_proof(system: ProofSystem, secret: int, nonce: Optional[int] = None) -> Proof:
    """Run commit, challenge and respond for ``secret``.

    ``nonce`` is drawn fresh when omitted. Passing one explicitly is meant for
    tests: a nonce reused under a different challenge reveals the secret.
    """

    if nonce is None:
        nonce = generate_random_number_below(system.modulus)
    commitment = system.generate_commitment(nonce)
    challenge = system.generate_challenge(commitment)
    response = system.compute_response(nonce, secret, challenge)
    logger.debug("Created proof for a %d-bit modulus", system.modulus.bit_length())
    return Proof(commitment=commitment, challenge=challenge, response=response)


def run_demonstration() -> Tuple[Proof, bool]:
    """Prove and verify once with the fixed demonstration parameters."""

    modulus, identity = get_constants()
    system = ProofSystem(modulus=modulus, identity=identity)
    secret = int.from_bytes(bytes.fromhex(DEMO_SECRET_HEX), "big")
    proof = create_proof(system, secret)
    return proof, system.verify_proof(proof)


__all__ = [
    "Proof",
    "ProofSystem",
    "check_hash_name",
    "create_proof",
    "decode_hex_integer",
    "generate_random_number_below",
    "get_constants",
    "int_to_bytes",
    "run_demonstration",
]
