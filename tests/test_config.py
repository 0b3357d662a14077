import json
import os
import tempfile
import unittest

from ffsproof.config import (
    ConfigurationError,
    ProverConfig,
    VerifierConfig,
    decode_hex_integer,
    demo_prover_config,
    derive_prover_config,
    load_config,
    parse_config,
)
from ffsproof.constants import DEMO_MODULUS_HEX, DEMO_SECRET_HEX
from ffsproof.crypto import ProofSystem, create_proof, get_constants


class TestHexDecoding(unittest.TestCase):
    def test_accepted_forms(self) -> None:
        self.assertEqual(decode_hex_integer("ff"), 255)
        self.assertEqual(decode_hex_integer("0xFF"), 255)
        self.assertEqual(decode_hex_integer("f"), 15)
        self.assertEqual(decode_hex_integer("01 00\n"), 256)
        self.assertEqual(decode_hex_integer(42), 42)

    def test_rejected_forms(self) -> None:
        for value in ("", "0x", "xyz", "-1", "12g4", -3, True, 1.5, None):
            with self.subTest(value=value):
                with self.assertRaises(ValueError):
                    decode_hex_integer(value)


class TestConfiguration(unittest.TestCase):
    def test_demo_config_matches_constants(self) -> None:
        config = demo_prover_config()
        self.assertEqual((config.modulus, config.identity), get_constants())
        self.assertEqual(config.secret, int(DEMO_SECRET_HEX, 16))
        self.assertEqual(config.hash_name, "sha256")

    def test_verifier_config_from_hex(self) -> None:
        config = parse_config({"modulus": DEMO_MODULUS_HEX, "identity": "0x04"})
        self.assertIsInstance(config, VerifierConfig)
        self.assertEqual(config.modulus, int(DEMO_MODULUS_HEX, 16))
        self.assertEqual(config.identity, 4)

    def test_verifier_ignores_secret(self) -> None:
        payload = demo_prover_config().to_dict()
        config = parse_config(payload, VerifierConfig)
        self.assertFalse(hasattr(config, "secret"))
        self.assertEqual(config.to_dict(), {key: payload[key] for key in ("modulus", "identity", "hash_name")})

    def test_malformed_literal_is_configuration_error(self) -> None:
        with self.assertRaises(ConfigurationError):
            parse_config({"modulus": "B10B8F96ZZ", "identity": "04"})
        with self.assertRaises(ConfigurationError):
            parse_config({"modulus": "", "identity": "04"})
        with self.assertRaises(ConfigurationError):
            parse_config({"identity": "04"})
        with self.assertRaises(ConfigurationError):
            parse_config(["modulus", "identity"])

    def test_inconsistent_parameters_rejected(self) -> None:
        with self.assertRaises(ConfigurationError):
            parse_config({"modulus": "0x10", "identity": "0x10"})
        with self.assertRaises(ConfigurationError):
            parse_config({"modulus": "0x01", "identity": "0x00"})
        with self.assertRaises(ConfigurationError):
            parse_config({"modulus": "0x11", "identity": "0x05", "secret": "0x03"}, ProverConfig)
        with self.assertRaises(ConfigurationError):
            parse_config({"modulus": DEMO_MODULUS_HEX, "identity": "04", "hash_name": "md5"})

    def test_derive_prover_config(self) -> None:
        config = derive_prover_config("0x11", "0x03")
        self.assertEqual(config.identity, 9)
        with self.assertRaises(ConfigurationError):
            derive_prover_config("0x11", "not hex")
        with self.assertRaises(ConfigurationError):
            derive_prover_config("0x01", "0x03")

    def test_load_config_round_trip(self) -> None:
        config = demo_prover_config()
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "prover.json")
            with open(path, "w", encoding="utf-8") as handle:
                json.dump(config.to_dict(), handle)
            loaded = load_config(path, ProverConfig)
            self.assertEqual(loaded, config)

            system = ProofSystem.from_config(load_config(path))
            self.assertTrue(system.verify_proof(create_proof(system, loaded.secret)))

    def test_load_config_invalid_json(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "broken.json")
            with open(path, "w", encoding="utf-8") as handle:
                handle.write("{not json")
            with self.assertRaises(ConfigurationError):
                load_config(path)

    def test_load_config_invalid_utf8(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "binary.json")
            with open(path, "wb") as handle:
                handle.write(b"\xff\xfe{")
            with self.assertRaises(ConfigurationError):
                load_config(path)


if __name__ == "__main__":
    unittest.main()
