"""Client side of SCRAM authentication (RFC 5802)."""

from __future__ import annotations

import base64
import binascii
import hmac
import os
import re
from typing import Any, Callable

_NONCE_LEN = 6
_ITER_COUNT = re.compile(rb"[+-]?[0-9]+")


class ScramError(Exception):
    """Raised when a SCRAM exchange fails."""


def _escape_user(user: str) -> bytes:
    return user.replace("=", "=3D").replace(",", "=2C").encode("utf-8")


def _xor(left: bytes, right: bytes) -> bytes:
    return bytes(a ^ b for a, b in zip(left, right))


class ScramClient:
    """Drives a SCRAM-{SHA-1,SHA-256,...} exchange, one server message at a time.

    ``hash_factory`` is a hash constructor such as ``hashlib.sha256``.  After
    each call to :meth:`step` the message for the server is in :attr:`out`.
    """

    def __init__(
        self, hash_factory: Callable[..., Any], user: str, password: str
    ) -> None:
        self._hash_factory = hash_factory
        self._user = user
        self._password = password
        self._step = 0
        self._out = b""
        self._error: ScramError | None = None
        self._client_nonce = b""
        self._server_nonce = b""
        self._salted_password = b""
        self._auth_message = bytearray()

    @property
    def out(self) -> bytes:
        """Data to send to the server for the current step."""
        return self._out

    @property
    def error(self) -> ScramError | None:
        """The error that ended the exchange, if any."""
        return self._error

    def set_nonce(self, nonce: bytes) -> None:
        """Use ``nonce`` as the client nonce instead of a random one."""
        self._client_nonce = bytes(nonce)

    def step(self, data: bytes = b"") -> bool:
        """Process a server message and prepare the next client message.

        Returns True while more server data is expected.  Raises ScramError
        when the exchange fails; later calls then return False.
        """
        self._out = b""
        if self._step > 2 or self._error is not None:
            return False
        self._step += 1
        handler = (self._first, self._second, self._final)[self._step - 1]
        try:
            self._out = handler(bytes(data))
        except ScramError as exc:
            self._error = exc
            self._out = b""
            raise
        return self._step <= 2

    def _first(self, _data: bytes) -> bytes:
        if not self._client_nonce:
            self._client_nonce = base64.b64encode(os.urandom(_NONCE_LEN))
        self._auth_message += b"n=" + _escape_user(self._user)
        self._auth_message += b",r=" + self._client_nonce
        return b"n,," + bytes(self._auth_message)

    def _second(self, data: bytes) -> bytes:
        self._auth_message += b"," + data

        fields = data.split(b",")
        if len(fields) != 3:
            raise ScramError(
                f"expected 3 fields in first SCRAM-SHA-1 server message, "
                f"got {len(fields)}: {data!r}"
            )
        nonce_field, salt_field, iter_field = fields
        if not nonce_field.startswith(b"r="):
            raise ScramError(f"server sent an invalid SCRAM-SHA-1 nonce: {nonce_field!r}")
        if not salt_field.startswith(b"s=") or len(salt_field) < 6:
            raise ScramError(f"server sent an invalid SCRAM-SHA-1 salt: {salt_field!r}")
        if not iter_field.startswith(b"i=") or len(iter_field) < 6:
            raise ScramError(
                f"server sent an invalid SCRAM-SHA-1 iteration count: {iter_field!r}"
            )

        self._server_nonce = nonce_field[2:]
        if not self._server_nonce.startswith(self._client_nonce):
            raise ScramError(
                f"server SCRAM-SHA-1 nonce is not prefixed by client nonce: "
                f"got {self._server_nonce!r}, want {self._client_nonce!r}+\"...\""
            )

        try:
            salt = base64.b64decode(salt_field[2:], validate=True)
        except (binascii.Error, ValueError):
            raise ScramError(
                f"cannot decode SCRAM-SHA-1 salt sent by server: {salt_field!r}"
            ) from None

        if not _ITER_COUNT.fullmatch(iter_field[2:]):
            raise ScramError(
                f"server sent an invalid SCRAM-SHA-1 iteration count: {iter_field!r}"
            )
        self._salted_password = self._salt_password(salt, int(iter_field[2:]))

        self._auth_message += b",c=biws,r=" + self._server_nonce
        return b"c=biws,r=" + self._server_nonce + b",p=" + self._client_proof()

    def _final(self, data: bytes) -> bytes:
        fields = data.split(b",")
        is_verifier = len(fields) == 1 and fields[0].startswith(b"v=")
        is_error = len(fields) == 1 and fields[0].startswith(b"e=")
        if is_error:
            raise ScramError(
                "SCRAM-SHA-1 authentication error: "
                + fields[0][2:].decode("utf-8", "replace")
            )
        if not is_verifier:
            raise ScramError(f"unsupported SCRAM-SHA-1 final message from server: {data!r}")

        received = fields[0][2:]
        if not hmac.compare_digest(self._server_signature(), received):
            raise ScramError(
                f"cannot authenticate SCRAM-SHA-1 server signature: {received!r}"
            )
        return b""

    def _hmac(self, key: bytes, message: bytes) -> bytes:
        return hmac.new(key, message, self._hash_factory).digest()

    def _salt_password(self, salt: bytes, iterations: int) -> bytes:
        material = self._password.encode()
        block = self._hmac(material, salt + b"\x00\x00\x00\x01")
        result = block
        for _ in range(1, iterations):
            block = self._hmac(material, block)
            result = _xor(result, block)
        return result

    def _client_proof(self) -> bytes:
        client_key = self._hmac(self._salted_password, b"Client Key")
        stored_key = self._hash_factory(client_key).digest()
        signature = self._hmac(stored_key, bytes(self._auth_message))
        return base64.b64encode(_xor(signature, client_key))

    def _server_signature(self) -> bytes:
        server_key = self._hmac(self._salted_password, b"Server Key")
        return base64.b64encode(self._hmac(server_key, bytes(self._auth_message)))