"""Non-interactive Feige-Fiat-Shamir proofs of knowledge of a square root."""

from .config import (
    ConfigurationError,
    ProverConfig,
    VerifierConfig,
    demo_prover_config,
    derive_prover_config,
    load_config,
    parse_config,
)
from .crypto import (
    Proof,
    ProofSystem,
    create_proof,
    generate_random_number_below,
    get_constants,
    run_demonstration,
)

__all__ = [
    "ConfigurationError",
    "ProverConfig",
    "VerifierConfig",
    "demo_prover_config",
    "derive_prover_config",
    "load_config",
    "parse_config",
    "Proof",
    "ProofSystem",
    "create_proof",
    "generate_random_number_below",
    "get_constants",
    "run_demonstration",
]
