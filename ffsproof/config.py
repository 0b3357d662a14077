"""Configuration records for provers and verifiers."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Type, TypeVar, Union

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator, model_validator

from .constants import DEFAULT_HASH, DEMO_MODULUS_HEX, DEMO_SECRET_HEX
from .crypto import check_hash_name, decode_hex_integer

logger = logging.getLogger(__name__)


class ConfigurationError(ValueError):
    """Raised when parameters cannot be decoded or are inconsistent."""


class VerifierConfig(BaseModel):
    """Public parameters: ``{modulus, identity}``."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    modulus: int
    identity: int
    hash_name: str = DEFAULT_HASH

    @field_validator("modulus", "identity", mode="before")
    @classmethod
    def decode_integer(cls, value: object) -> int:
        return decode_hex_integer(value)

    @field_validator("hash_name")
    @classmethod
    def check_hash(cls, value: str) -> str:
        return check_hash_name(value)

    @model_validator(mode="after")
    def check_ranges(self) -> "VerifierConfig":
        if self.modulus < 2:
            raise ValueError("Modulus must be greater than one")
        if self.identity >= self.modulus:
            raise ValueError("Identity must be smaller than the modulus")
        return self

    def to_dict(self) -> Dict[str, str]:
        return {
            "modulus": hex(self.modulus),
            "identity": hex(self.identity),
            "hash_name": self.hash_name,
        }


class ProverConfig(VerifierConfig):
    """Prover parameters: ``{modulus, identity, secret}``."""

    secret: int

    @field_validator("secret", mode="before")
    @classmethod
    def decode_secret(cls, value: object) -> int:
        return decode_hex_integer(value)

    @model_validator(mode="after")
    def check_identity(self) -> "ProverConfig":
        if pow(self.secret, 2, self.modulus) != self.identity:
            raise ValueError("Identity does not match secret^2 mod modulus")
        return self

    def to_dict(self) -> Dict[str, str]:
        payload = super().to_dict()
        payload["secret"] = hex(self.secret)
        return payload


ConfigT = TypeVar("ConfigT", bound=VerifierConfig)


def parse_config(data: object, config_cls: Type[ConfigT] = VerifierConfig) -> ConfigT:
    if not isinstance(data, dict):
        raise ConfigurationError("Configuration must be a JSON object")
    try:
        return config_cls.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid {config_cls.__name__}: {exc}") from exc


def load_config(path: Union[str, Path], config_cls: Type[ConfigT] = VerifierConfig) -> ConfigT:
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except UnicodeDecodeError as exc:
        raise ConfigurationError(f"{path} is not valid UTF-8: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"{path} is not valid JSON: {exc}") from exc
    config = parse_config(data, config_cls)
    logger.debug("Loaded %s from %s", config_cls.__name__, path)
    return config


def derive_prover_config(
    modulus: object,
    secret: object,
    hash_name: str = DEFAULT_HASH,
) -> ProverConfig:
    """Build a prover configuration, computing ``identity = secret^2 mod modulus``."""

    try:
        modulus_value = decode_hex_integer(modulus)
        secret_value = decode_hex_integer(secret)
    except ValueError as exc:
        raise ConfigurationError(str(exc)) from exc
    if modulus_value < 2:
        raise ConfigurationError("Modulus must be greater than one")
    identity = pow(secret_value, 2, modulus_value)
    return parse_config(
        {
            "modulus": modulus_value,
            "identity": identity,
            "secret": secret_value,
            "hash_name": hash_name,
        },
        ProverConfig,
    )


def demo_prover_config() -> ProverConfig:
    return derive_prover_config(DEMO_MODULUS_HEX, DEMO_SECRET_HEX)


__all__ = [
    "ConfigurationError",
    "ProverConfig",
    "VerifierConfig",
    "decode_hex_integer",
    "demo_prover_config",
    "derive_prover_config",
    "load_config",
    "parse_config",
]
