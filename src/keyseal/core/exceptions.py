"""
Exceptions for the keyseal core.

Every failure the exchange can hit is a subclass of KeysealError so the
frontend has one place to catch and render; ``kind`` tells them apart.
"""

from enum import Enum


class ErrorKind(Enum):
    RANDOMNESS_UNAVAILABLE = "randomness_unavailable"
    INVALID_PEER_KEY = "invalid_peer_key"
    SHARED_SECRET_MISMATCH = "shared_secret_mismatch"
    OUTPUT_LENGTH_UNSUPPORTED = "output_length_unsupported"
    INVALID_KEY_OR_NONCE_SIZE = "invalid_key_or_nonce_size"
    AUTHENTICATION_FAILED = "authentication_failed"
    MALFORMED_MESSAGE = "malformed_message"
    INVALID_INPUT = "invalid_input"
    ROUND_TRIP_MISMATCH = "round_trip_mismatch"
    CONFIGURATION = "configuration"


class KeysealError(Exception):
    # general container for errors
    kind: ErrorKind = None

    def __init__(self, message: str = ""):
        super().__init__(message or self.__class__.__doc__ or self.__class__.__name__)
        self.message = str(self)


class RandomnessUnavailableError(KeysealError):
    """Secure random source could not be read."""

    kind = ErrorKind.RANDOMNESS_UNAVAILABLE


class InvalidPeerKeyError(KeysealError):
    """Peer public key is malformed or a low-order point."""

    kind = ErrorKind.INVALID_PEER_KEY


class SharedSecretMismatchError(KeysealError):
    """Both parties derived different secrets (internal defect)."""

    kind = ErrorKind.SHARED_SECRET_MISMATCH


class OutputLengthUnsupportedError(KeysealError):
    """Requested KDF output length is out of range."""

    kind = ErrorKind.OUTPUT_LENGTH_UNSUPPORTED


class InvalidKeyOrNonceSizeError(KeysealError):
    """Cipher key or nonce has the wrong size."""

    kind = ErrorKind.INVALID_KEY_OR_NONCE_SIZE


class AuthenticationFailedError(KeysealError):
    """Ciphertext failed authentication."""

    kind = ErrorKind.AUTHENTICATION_FAILED


class MalformedMessageError(KeysealError):
    # raised when a packaged message is too short to hold nonce and tag
    kind = ErrorKind.MALFORMED_MESSAGE


class InvalidInputError(KeysealError):
    # raised for a plaintext or own key the exchange cannot use
    kind = ErrorKind.INVALID_INPUT


class RoundTripMismatchError(KeysealError):
    # raised when the opened plaintext differs from what was sealed
    kind = ErrorKind.ROUND_TRIP_MISMATCH


class ConfigurationError(KeysealError):
    # raised for invalid settings or environment overrides
    kind = ErrorKind.CONFIGURATION
