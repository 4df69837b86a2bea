"""
Encrypted key-value store for the toggle state.

Follows the EncryptedSharedPreferences layout:
- preference names are encrypted deterministically with AES-256-SIV
- values are encrypted with AES-256-GCM, bound to their encrypted name
- the keyset lives in the OS keyring, never next to the data file

File format (JSON):
    {
        "version": 1,
        "keyset": "<b64 HMAC-SHA256(value_key, tag)>",
        "entries": {"<b64 SIV(name)>": "<b64 nonce||GCM(value)>"}
    }

The ``keyset`` fingerprint binds the file to the keyset that wrote it, so a
replaced keyset is reported instead of reading every entry as absent.
"""

import base64
import binascii
import json
import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import keyring
from cryptography.exceptions import InvalidSignature, InvalidTag
from cryptography.hazmat.primitives import hashes, hmac
from cryptography.hazmat.primitives.ciphers.aead import AESGCM, AESSIV
from keyring.errors import KeyringError, PasswordDeleteError

from .errors import StorageCorrupted

logger = logging.getLogger(__name__)

TOGGLE_STATE_KEY = "toggle_state"
FORMAT_VERSION = 1
NONCE_SIZE = 12
KEYSET_CHECK_TAG = b"togglemaster.keyset.v1"


def default_data_dir() -> Path:
    """Data directory on desktop platforms."""
    return Path.home() / ".togglemaster"


def _b64encode(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def _b64decode(text: str) -> bytes:
    try:
        return base64.b64decode(text.encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError, AttributeError) as e:
        raise StorageCorrupted(f"Invalid base64 in store: {e}") from e


@dataclass(frozen=True)
class Keyset:
    """Name and value keys for one encrypted store."""

    name_key: bytes  # AES-256-SIV, 64 bytes
    value_key: bytes  # AES-256-GCM, 32 bytes

    @classmethod
    def generate(cls) -> "Keyset":
        return cls(
            name_key=AESSIV.generate_key(bit_length=512),
            value_key=AESGCM.generate_key(bit_length=256),
        )

    def to_json(self) -> str:
        return json.dumps(
            {"name_key": _b64encode(self.name_key), "value_key": _b64encode(self.value_key)},
            sort_keys=True,
        )

    @classmethod
    def from_json(cls, raw: str) -> "Keyset":
        try:
            data = json.loads(raw)
            keyset = cls(
                name_key=_b64decode(data["name_key"]),
                value_key=_b64decode(data["value_key"]),
            )
        except (ValueError, KeyError, TypeError) as e:
            raise StorageCorrupted(f"Malformed keyset in keyring: {e}") from e
        if len(keyset.name_key) != 64 or len(keyset.value_key) != 32:
            raise StorageCorrupted("Keyset has unexpected key sizes")
        return keyset

    def _check_mac(self) -> hmac.HMAC:
        mac = hmac.HMAC(self.value_key, hashes.SHA256())
        mac.update(KEYSET_CHECK_TAG)
        return mac

    def fingerprint(self) -> str:
        """Keyed tag identifying this keyset without revealing it."""
        return _b64encode(self._check_mac().finalize())

    def matches(self, fingerprint: str) -> bool:
        """Check a fingerprint written by ``fingerprint``."""
        try:
            self._check_mac().verify(_b64decode(fingerprint))
        except InvalidSignature:
            return False
        return True

    def encrypt_name(self, name: str) -> bytes:
        return AESSIV(self.name_key).encrypt(name.encode("utf-8"), None)

    def encrypt_value(self, value: Any, associated_data: bytes) -> bytes:
        nonce = os.urandom(NONCE_SIZE)
        plaintext = json.dumps(value).encode("utf-8")
        return nonce + AESGCM(self.value_key).encrypt(nonce, plaintext, associated_data)

    def decrypt_value(self, blob: bytes, associated_data: bytes) -> Any:
        if len(blob) <= NONCE_SIZE:
            raise StorageCorrupted("Encrypted value is truncated")
        nonce, ciphertext = blob[:NONCE_SIZE], blob[NONCE_SIZE:]
        try:
            plaintext = AESGCM(self.value_key).decrypt(nonce, ciphertext, associated_data)
        except InvalidTag as e:
            raise StorageCorrupted("Encrypted value failed authentication") from e
        try:
            return json.loads(plaintext.decode("utf-8"))
        except (ValueError, UnicodeDecodeError) as e:
            raise StorageCorrupted(f"Decrypted value is not JSON: {e}") from e


class StateStore:
    """
    Encrypted persistent store holding the toggle state.

    One instance owns one keyset for its lifetime, so save and load always
    use the same key material.
    """

    def __init__(self, path: Path, keyring_service: str, key_alias: str):
        """
        Initialize the store.

        Args:
            path: Location of the encrypted preferences file.
            keyring_service: Keyring service name holding the keyset.
            key_alias: Keyring entry name for the keyset.
        """
        self.path = Path(path)
        self.keyring_service = keyring_service
        self.key_alias = key_alias
        self._keyset: Keyset | None = None

    @classmethod
    def from_config(cls, storage_config: dict, data_dir: str | Path) -> "StateStore":
        """
        Build a store from the ``storage`` config section.

        Args:
            storage_config: Storage section of the app config.
            data_dir: Fallback directory when ``storage.directory`` is empty.
        """
        directory = storage_config.get("directory") or data_dir
        return cls(
            path=Path(directory) / storage_config.get("filename", "TogglePrefs.json"),
            keyring_service=storage_config.get("keyring_service", "togglemaster"),
            key_alias=storage_config.get("key_alias", "togglemaster-master-keyset"),
        )

    def save(self, state: bool) -> None:
        """Persist the toggle state."""
        self.put_bool(TOGGLE_STATE_KEY, state)

    def load(self) -> bool:
        """Load the toggle state, False if it was never saved."""
        return self.get_bool(TOGGLE_STATE_KEY, False)

    def put_bool(self, key: str, value: bool) -> None:
        """Encrypt and write one boolean preference."""
        data = self._read_file()
        keyset = self._get_keyset(create=data is None)

        if data is None:
            entries = {}
        else:
            self._verify_keyset(keyset, data)
            entries = data["entries"]

        name = keyset.encrypt_name(key)
        entries[_b64encode(name)] = _b64encode(keyset.encrypt_value(bool(value), name))
        self._write_file(keyset, entries)
        logger.debug(f"Saved preference {key!r}")

    def get_bool(self, key: str, default: bool = False) -> bool:
        """
        Read one boolean preference.

        Returns:
            The stored value, or ``default`` when the file or entry is absent.

        Raises:
            StorageCorrupted: The file exists but can not be decrypted or parsed.
        """
        data = self._read_file()
        if data is None:
            return default

        keyset = self._get_keyset(create=False)
        self._verify_keyset(keyset, data)
        name = keyset.encrypt_name(key)
        encoded = data["entries"].get(_b64encode(name))
        if encoded is None:
            return default

        value = keyset.decrypt_value(_b64decode(encoded), name)
        if not isinstance(value, bool):
            raise StorageCorrupted(f"Preference {key!r} is not a boolean")
        return value

    def reset(self) -> None:
        """Delete the data file and its keyset."""
        if self.path.exists():
            self.path.unlink()
            logger.info(f"Removed encrypted store: {self.path}")
        try:
            keyring.delete_password(self.keyring_service, self.key_alias)
            logger.info(f"Removed keyset {self.key_alias!r} from keyring")
        except PasswordDeleteError:
            logger.debug("No keyset to remove")
        self._keyset = None

    def _get_keyset(self, create: bool) -> Keyset:
        """
        Fetch the keyset from the keyring, caching it on first use.

        Args:
            create: Generate and store a keyset if none exists. Only allowed
                when there is no data file that an old keyset encrypted.
        """
        if self._keyset is not None:
            return self._keyset

        try:
            raw = keyring.get_password(self.keyring_service, self.key_alias)
        except KeyringError as e:
            raise StorageCorrupted(f"Keyring unavailable: {e}") from e

        if raw is None:
            if not create:
                raise StorageCorrupted(
                    f"Keyset {self.key_alias!r} is missing but {self.path} exists"
                )
            keyset = Keyset.generate()
            try:
                keyring.set_password(self.keyring_service, self.key_alias, keyset.to_json())
            except KeyringError as e:
                raise StorageCorrupted(f"Could not store keyset: {e}") from e
            logger.info(f"Generated new keyset {self.key_alias!r}")
        else:
            keyset = Keyset.from_json(raw)

        self._keyset = keyset
        return keyset

    def _verify_keyset(self, keyset: Keyset, data: dict) -> None:
        if not keyset.matches(data["keyset"]):
            raise StorageCorrupted(
                f"Keyset {self.key_alias!r} does not match the one that wrote {self.path}"
            )

    def _read_file(self) -> dict | None:
        """Read and validate the data file, None if it does not exist."""
        if not self.path.exists():
            return None

        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except OSError as e:
            raise StorageCorrupted(f"Could not read store file {self.path}: {e}") from e
        except (ValueError, UnicodeDecodeError) as e:
            raise StorageCorrupted(f"Unreadable store file {self.path}: {e}") from e

        if not isinstance(data, dict) or data.get("version") != FORMAT_VERSION:
            raise StorageCorrupted(f"Unsupported store format in {self.path}")
        if not isinstance(data.get("keyset"), str):
            raise StorageCorrupted(f"Store {self.path} has no keyset fingerprint")
        if not isinstance(data.get("entries"), dict):
            raise StorageCorrupted(f"Store {self.path} has no entries map")
        return data

    def _write_file(self, keyset: Keyset, entries: dict[str, str]) -> None:
        """Atomically replace the data file."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=".", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(
                    {
                        "version": FORMAT_VERSION,
                        "keyset": keyset.fingerprint(),
                        "entries": entries,
                    },
                    f,
                )
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise
