"""Sign-up configuration."""
import os

#################### Account service ####################
ACCOUNTS_API_ENDPOINT = os.environ.get(
    'ACCOUNTS_API_ENDPOINT',
    'http://localhost:8000/api/signup'
)
"""URL of the remote account-creation endpoint."""

ACCOUNTS_API_TIMEOUT = float(os.environ.get('ACCOUNTS_API_TIMEOUT', '10'))
"""Seconds to wait for the account service before giving up.

Without a timeout a request that never settles would leave the form loading
forever."""


#################### Key-value store ####################
REDIS_HOST = os.environ.get('REDIS_HOST', 'localhost')
REDIS_PORT = os.environ.get('REDIS_PORT', '6379')
REDIS_DATABASE = os.environ.get('REDIS_DATABASE', '0')

REDIS_FAKE = os.environ.get('REDIS_FAKE', '0').strip().lower() \
    in ('1', 'true', 'yes', 'on')
"""Use the FakeRedis library instead of a redis service.

Useful for testing, dev, beta. Accepts ``1``, ``true``, ``yes`` or ``on``."""

PROFILE_KEY = 'userProfile'
"""Key under which the JSON-encoded user profile is stored."""

USERS_KEY = 'users'
"""Key under which the JSON-encoded list of accounts is stored."""


#################### Form timing ####################
STATUS_MESSAGE_TIMEOUT = float(os.environ.get('STATUS_MESSAGE_TIMEOUT', '3.0'))
"""Seconds before a transient status announcement is cleared."""

SUBMIT_SETTLE_DELAY = float(os.environ.get('SUBMIT_SETTLE_DELAY', '1.5'))
"""Seconds to hold the loading state after the account service answers."""

REDIRECT_DELAY = float(os.environ.get('REDIRECT_DELAY', '1.5'))
"""Seconds between a successful sign-up and the redirect to login."""

LOGIN_PATH = os.environ.get('LOGIN_PATH', '/')
"""Where the user is sent after signing up."""


#################### Logging ####################
LOGLEVEL = int(os.environ.get('LOGLEVEL', 20))
