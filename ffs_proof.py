"""Command line interface for non-interactive Feige-Fiat-Shamir proofs."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from ffsproof.config import (
    ProverConfig,
    VerifierConfig,
    derive_prover_config,
    load_config,
)
from ffsproof.constants import DEFAULT_HASH
from ffsproof.crypto import Proof, ProofSystem, create_proof, run_demonstration

logger = logging.getLogger("ffs_proof")


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log protocol steps to stderr",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser(
        "demo",
        help="Prove and verify once with the built-in demonstration parameters",
    )

    identity_parser = subparsers.add_parser(
        "identity",
        help="Derive the public identity for a secret and print a prover configuration",
    )
    identity_parser.add_argument("--modulus", required=True, help="Hex-encoded modulus")
    identity_parser.add_argument("--secret", required=True, help="Hex-encoded prover secret")
    identity_parser.add_argument(
        "--hash",
        dest="hash_name",
        default=DEFAULT_HASH,
        help="hashlib algorithm used for challenges (default: sha256)",
    )
    identity_parser.add_argument(
        "--output",
        help="Optional file path to store the configuration JSON",
    )

    prove_parser = subparsers.add_parser("prove", help="Create a proof")
    prove_parser.add_argument("config", help="Path to a prover configuration JSON file")
    prove_parser.add_argument(
        "--output",
        help="Optional file path to store the proof JSON",
    )

    verify_parser = subparsers.add_parser("verify", help="Verify a proof")
    verify_parser.add_argument(
        "config",
        help="Path to a configuration JSON file holding modulus and identity",
    )
    verify_parser.add_argument("proof", help="Path to the proof JSON data")

    return parser.parse_args(argv)


def _write_json(path: str, payload: dict) -> None:
    Path(path).write_text(json.dumps(payload, indent=2), encoding="utf-8")


def _run(namespace: argparse.Namespace) -> int:
    if namespace.command == "demo":
        proof, verified = run_demonstration()
        payload = {"proof": proof.to_dict(), "verified": verified}
        print(json.dumps(payload, indent=2))
        return 0

    if namespace.command == "identity":
        config = derive_prover_config(
            namespace.modulus,
            namespace.secret,
            hash_name=namespace.hash_name,
        )
        payload = config.to_dict()
        if namespace.output:
            _write_json(namespace.output, payload)
        print(json.dumps(payload, indent=2))
        return 0

    if namespace.command == "prove":
        config = load_config(namespace.config, ProverConfig)
        system = ProofSystem.from_config(config)
        proof = create_proof(system, config.secret)
        payload = proof.to_dict()
        if namespace.output:
            _write_json(namespace.output, payload)
        print(json.dumps(payload, indent=2))
        return 0

    if namespace.command == "verify":
        config = load_config(namespace.config, VerifierConfig)
        proof_payload = json.loads(Path(namespace.proof).read_text(encoding="utf-8"))
        if isinstance(proof_payload, dict) and isinstance(proof_payload.get("proof"), dict):
            proof_payload = proof_payload["proof"]
        proof = Proof.from_dict(proof_payload)
        verified = ProofSystem.from_config(config).verify_proof(proof)
        print(json.dumps({"verified": verified}, indent=2))
        return 0

    raise RuntimeError("Unreachable")


def main(argv: list[str] | None = None) -> int:
    namespace = parse_args(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(
        level=logging.DEBUG if namespace.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        return _run(namespace)
    except (OSError, ValueError) as exc:
        logger.debug("Command %s failed", namespace.command, exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
