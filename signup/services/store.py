"""
Persistence for accounts and the user profile.

Records are kept as JSON strings in a key-value store. The form only needs two
keys: ``userProfile``, the profile left by an earlier visit, and ``users``, the
list of accounts created from this form. :class:`.UserRepository` hides the
keys and the encoding from the controller.
"""

import json
from typing import Any, List, Optional

import redis
import fakeredis

from .. import config, logging
from ..domain import Account, UserProfile
from .exceptions import MalformedRecord, StorageFailed

logger = logging.getLogger(__name__)


class KeyValueStore(object):
    """
    String-keyed store of string values, backed by Redis.

    The StrictRedis instance is thread safe and connections are attached at
    the time a command is executed. This class adds error translation.
    """

    def __init__(self, r: redis.StrictRedis) -> None:
        """Wrap an existing Redis client."""
        self.r = r

    def get(self, key: str) -> Optional[str]:
        """Get the value stored at ``key``, or ``None``."""
        try:
            value: Any = self.r.get(key)
        except redis.exceptions.ConnectionError as e:
            raise StorageFailed(f'Connection failed: {e}') from e
        except redis.exceptions.RedisError as e:
            raise StorageFailed(f'Failed to read {key}: {e}') from e
        if isinstance(value, bytes):
            return value.decode('utf-8')
        return value

    def set(self, key: str, value: str) -> None:
        """Store ``value`` at ``key``."""
        try:
            self.r.set(key, value)
        except redis.exceptions.ConnectionError as e:
            raise StorageFailed(f'Connection failed: {e}') from e
        except redis.exceptions.RedisError as e:
            raise StorageFailed(f'Failed to write {key}: {e}') from e


class UserRepository(object):
    """Reads and writes sign-up records in a :class:`.KeyValueStore`."""

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    def load_profile(self) -> Optional[UserProfile]:
        """
        Load the stored user profile.

        Returns
        -------
        :class:`.UserProfile` or None
            None if no profile has been stored.

        Raises
        ------
        :class:`.MalformedRecord`
            If the stored profile is not a JSON object.

        """
        raw = self.store.get(config.PROFILE_KEY)
        if not raw:
            return None
        data = _decode(raw, config.PROFILE_KEY)
        if not isinstance(data, dict):
            raise MalformedRecord('Stored profile is not an object')
        return UserProfile.from_dict(data)

    def save_profile(self, profile: UserProfile) -> None:
        """Store ``profile``, replacing any earlier one."""
        self.store.set(config.PROFILE_KEY, json.dumps(profile.to_dict()))

    def load_users(self) -> List[Account]:
        """Load the recorded accounts; empty if none have been stored."""
        raw = self.store.get(config.USERS_KEY)
        if not raw:
            return []
        data = _decode(raw, config.USERS_KEY)
        if not isinstance(data, list):
            raise MalformedRecord('Stored users are not a list')
        try:
            return [Account.from_dict(item) for item in data]
        except (KeyError, TypeError, ValueError, OverflowError) as e:
            raise MalformedRecord(f'Could not read stored account: {e}') from e

    def save_users(self, users: List[Account]) -> None:
        """Store ``users``, replacing the recorded list."""
        data = json.dumps([account.to_dict() for account in users])
        self.store.set(config.USERS_KEY, data)


def _decode(raw: str, key: str) -> Any:
    try:
        return json.loads(raw)
    except ValueError as e:
        logger.debug('Could not decode %s: %s', key, e)
        raise MalformedRecord(f'Could not decode {key}') from e


def get_store() -> KeyValueStore:
    """Get a new store using the configured Redis connection."""
    if config.REDIS_FAKE:
        logger.debug('Using FakeRedis for the key-value store')
        return KeyValueStore(fakeredis.FakeStrictRedis(decode_responses=True))
    logger.debug('New Redis connection at %s, port %s',
                 config.REDIS_HOST, config.REDIS_PORT)
    return KeyValueStore(redis.StrictRedis(
        host=config.REDIS_HOST,
        port=int(config.REDIS_PORT),
        db=int(config.REDIS_DATABASE),
        decode_responses=True
    ))


def get_repository() -> UserRepository:
    """Get a :class:`.UserRepository` over the configured store."""
    return UserRepository(get_store())
