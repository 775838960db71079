"""chunkseal package."""

from importlib.metadata import PackageNotFoundError, version

from chunkseal.crypto.aead import AeadAlgorithm, AeadKey
from chunkseal.crypto.nonce import derive_nonce
from chunkseal.stream import (
    StreamingDecryptor,
    StreamingDecryptorSetup,
    StreamingEncryptor,
    StreamingEncryptorSetup,
    StreamParameters,
)

__all__ = [
    "AeadAlgorithm",
    "AeadKey",
    "StreamParameters",
    "StreamingDecryptor",
    "StreamingDecryptorSetup",
    "StreamingEncryptor",
    "StreamingEncryptorSetup",
    "__version__",
    "derive_nonce",
]

try:
    __version__ = version("chunkseal")
except PackageNotFoundError:  # pragma: no cover - happens only from source checkout
    __version__ = "0.0.0-dev"
