"""Custom exceptions for chunkseal."""


class ChunkSealError(Exception):
    """Base exception for chunkseal."""


class StreamFormatError(ChunkSealError):
    """Stream configuration or framing does not match expected format."""


class InvalidKeyTypeError(StreamFormatError):
    """Key was generated for a different algorithm than the stream uses."""


class InvalidParametersError(StreamFormatError):
    """Stream parameters are out of range or malformed."""


class IntegrityError(ChunkSealError):
    """Chunk data integrity check failed."""


class TruncatedStreamError(StreamFormatError, IntegrityError):
    """Final frame is incomplete or was cut short."""


class UnsupportedFeatureError(ChunkSealError):
    """Algorithm or feature is not supported by this version."""


class NonceExhaustedError(ChunkSealError):
    """Chunk counter cannot advance without reusing a nonce."""


class StreamFinishedError(ChunkSealError):
    """Encryptor was used after finish()."""


class StreamFailedError(ChunkSealError):
    """Decryptor was used after a fatal error."""
