"""One-shot key exchange between two simulated parties, Alice and Bob.

The orchestrator walks a fixed sequence of states: both parties generate
X25519 key pairs, each computes the shared secret from the other's public
key, each derives the session key, Alice seals the message and Bob opens the
packaged bytes. Any failure moves the orchestrator to FAILED and the typed
error is re-raised; there are no retries.

Private keys, shared secrets and the second party's session key stay local
to :meth:`SessionOrchestrator.run` and never appear in the result.
"""
from __future__ import annotations

import hmac
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from keyseal.security.aead import SealedMessage, open_message, seal_message
from keyseal.security.agreement import KeyPair, compute_shared_secret, generate_keypair
from keyseal.security.entropy import RandomSource
from keyseal.security.kdf import derive_key

from .config import SessionConfig
from .exceptions import (
    InvalidInputError,
    KeysealError,
    RoundTripMismatchError,
    SharedSecretMismatchError,
)

logger = logging.getLogger(__name__)


class SessionState(Enum):
    INIT = "init"
    KEYS_GENERATED = "keys_generated"
    AGREEMENT_COMPUTED = "agreement_computed"
    AGREEMENT_VERIFIED = "agreement_verified"
    KEYS_DERIVED = "keys_derived"
    SEALED = "sealed"
    OPENED = "opened"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class SessionResult:
    """Public outcome of an exchange; everything here is safe to display."""

    plaintext: str
    alice_public: bytes
    bob_public: bytes
    session_key: bytes = field(repr=False)
    packaged: bytes
    decrypted: str


class SessionOrchestrator:
    def __init__(self, config: Optional[SessionConfig] = None, random_source: Optional[RandomSource] = None):
        self.config = config or SessionConfig()
        self._random_source = random_source
        self.state = SessionState.INIT
        self.failed_state: Optional[SessionState] = None
        self.error: Optional[KeysealError] = None

    def _advance(self, state: SessionState) -> None:
        logger.debug("session %s -> %s", self.state.value, state.value)
        self.state = state

    def _generate_keypairs(self) -> Tuple[KeyPair, KeyPair]:
        if not self.config.parallel_keygen:
            return generate_keypair(self._random_source), generate_keypair(self._random_source)

        # the two parties share nothing, so their key pairs can be made side by side
        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="keygen") as pool:
            alice_future = pool.submit(generate_keypair, self._random_source)
            bob_future = pool.submit(generate_keypair, self._random_source)
            return alice_future.result(), bob_future.result()

    def run(self, plaintext: str = "") -> SessionResult:
        """
        Run the whole exchange once and return the displayable results.

        An empty ``plaintext`` is replaced by ``config.default_message``.

        Raises:
            KeysealError: the first failure, after the state is set to FAILED
        """
        if self.state is not SessionState.INIT:
            raise RuntimeError(f"session already ran (state={self.state.value})")

        try:
            return self._run(plaintext)
        except KeysealError as e:
            self.failed_state = self.state
            self.error = e
            self._advance(SessionState.FAILED)
            # mismatches mean a defect, the rest are bad input or environment
            internal = isinstance(e, (SharedSecretMismatchError, RoundTripMismatchError))
            log = logger.error if internal else logger.warning
            log("session failed in state %s: %s (%s)", self.failed_state.value, e, e.kind.value)
            raise

    def _run(self, plaintext: str) -> SessionResult:
        cfg = self.config
        if not plaintext:
            plaintext = cfg.default_message
        try:
            message = plaintext.encode("utf-8")
        except UnicodeEncodeError as e:
            raise InvalidInputError(f"plaintext is not encodable as UTF-8: {e.reason}") from e

        alice, bob = self._generate_keypairs()
        self._advance(SessionState.KEYS_GENERATED)

        alice_secret = compute_shared_secret(alice.private_key, bob.public_key)
        bob_secret = compute_shared_secret(bob.private_key, alice.public_key)
        self._advance(SessionState.AGREEMENT_COMPUTED)

        if not hmac.compare_digest(alice_secret, bob_secret):
            raise SharedSecretMismatchError("Alice and Bob computed different shared secrets")
        self._advance(SessionState.AGREEMENT_VERIFIED)

        alice_key = derive_key(alice_secret, cfg.context_label, cfg.salt, cfg.key_length)
        bob_key = derive_key(bob_secret, cfg.context_label, cfg.salt, cfg.key_length)
        if not hmac.compare_digest(alice_key, bob_key):
            raise SharedSecretMismatchError("Alice and Bob derived different session keys")
        self._advance(SessionState.KEYS_DERIVED)

        packaged = seal_message(alice_key, message, self._random_source).to_bytes()
        self._advance(SessionState.SEALED)

        # Bob only sees the packaged bytes
        received = SealedMessage.from_bytes(packaged)
        decrypted = open_message(bob_key, received).decode("utf-8")
        self._advance(SessionState.OPENED)

        if decrypted != plaintext:
            raise RoundTripMismatchError("decrypted text does not match the sealed text")
        self._advance(SessionState.DONE)

        logger.info("exchange complete: message sealed into %d packaged bytes", len(packaged))
        return SessionResult(
            plaintext=plaintext,
            alice_public=alice.public_key,
            bob_public=bob.public_key,
            session_key=alice_key,
            packaged=packaged,
            decrypted=decrypted,
        )


def run_session(
    plaintext: str = "",
    config: Optional[SessionConfig] = None,
    random_source: Optional[RandomSource] = None,
) -> SessionResult:
    return SessionOrchestrator(config, random_source).run(plaintext)
