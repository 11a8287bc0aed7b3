"""
Protocol constants and configuration defaults.
"""

# Scrypt parameters used when the caller does not pass any.
DEFAULT_SCRYPT = {
    "cost": 4096,
    "block_size": 8,
    "parallel": 8,
    "size": 64,
}

# Block mode key header: two magic bytes and a flag byte.
OEP_HEADER = "0142"
OEP_FLAG = "e0"

# User id embedded in compact SM2 signatures.
DEFAULT_SM2_ID = "1234567812345678"

# Version byte prepended to an address before base58check encoding.
ADDR_VERSION = "17"

# Key type used by PrivateKey.insecure_default(). Tests only.
DEFAULT_ALGORITHM = {
    "algorithm": "ECDSA",
    "parameters": {
        "curve": "P-256",
    },
}

ADDRESS_SIZE = 20
NONCE_SIZE = 4
