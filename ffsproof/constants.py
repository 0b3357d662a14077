"""Fixed parameters used by the self-contained demonstration."""

# 1024-bit modulus. Real deployments supply their own through configuration.
DEMO_MODULUS_HEX = (
    "B10B8F96A080E01DDE92DE5EAE5D54EC52C99FBCFB06A3C69A6A9DCA52D23B61"
    "6073E28675A23D189838EF1E2EE652C013ECB4AEA906112324975C3CD49B83BF"
    "ACCBDD7D90C4BD7098488E9C219A73724EFFD6FAE5644738FAA31A4FF55BCCC0"
    "A151AF5F0DC8B4BD45BF37DF365C1A65E68CFDA76D4DA708DF1FB2BC2E4A4371"
)

# Known only to the prover.
DEMO_SECRET_HEX = "F518AA8781A8DF278ABA4E7D64B7CB9D49462353"

DEFAULT_HASH = "sha256"
MIN_DIGEST_BITS = 256
