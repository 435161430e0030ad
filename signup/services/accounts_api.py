"""The account service creates user accounts."""
from typing import Any, Optional
from functools import wraps

import requests

from .. import config, logging
from ..domain import SignUpResponse
from .exceptions import RegistrationFailed


logger = logging.getLogger(__name__)


class AccountsAPISession(object):
    """
    An HTTP session with the remote account service.

    The underlying :class:`requests.Session` keeps connections alive between
    calls, so one instance should be reused for the life of the process.
    """

    def __init__(self, endpoint: str, timeout: float = 10.0) -> None:
        """Create a new HTTP session."""
        self.endpoint = endpoint
        self.timeout = timeout
        self._session = requests.Session()
        self._adapter = requests.adapters.HTTPAdapter(max_retries=2)
        self._session.mount('http://', self._adapter)
        self._session.mount('https://', self._adapter)
        logger.debug('New AccountsAPISession with endpoint = %s', endpoint)

    def sign_up(self, email: str, name: str, password: str) -> SignUpResponse:
        """
        Ask the account service to create an account.

        Parameters
        ----------
        email : str
        name : str
        password : str

        Return
        ------
        :class:`.SignUpResponse`
            The service's reply. Interpreting ``response`` is up to the caller.

        Raises
        ------
        :class:`.RegistrationFailed`
            If the service cannot be reached, responds with an error status,
            or its reply cannot be read.

        """
        logger.debug('Request account creation for %s', email)
        try:
            response = self._session.post(
                self.endpoint,
                json={'email': email, 'name': name, 'password': password},
                timeout=self.timeout
            )
        except requests.exceptions.RequestException as e:
            logger.debug('Account service request failed: %s', e)
            raise RegistrationFailed('Could not reach the account service') \
                from e
        if not response.ok:
            logger.debug('Account service responded with status %i',
                         response.status_code)
            raise RegistrationFailed(
                'Account service responded with status %i'
                % response.status_code
            )
        try:
            data: Any = response.json()
        except ValueError as e:
            logger.debug('Account service response could not be decoded')
            raise RegistrationFailed('Could not read the account service'
                                     ' response') from e
        if not isinstance(data, dict):
            raise RegistrationFailed('Could not read the account service'
                                     ' response')
        return SignUpResponse(response=str(data.get('response', '')))


_current: Optional[AccountsAPISession] = None


def get_session() -> AccountsAPISession:
    """Create a new :class:`.AccountsAPISession` from the configuration."""
    return AccountsAPISession(config.ACCOUNTS_API_ENDPOINT,
                              config.ACCOUNTS_API_TIMEOUT)


def current_session() -> AccountsAPISession:
    """Get the shared :class:`.AccountsAPISession`, creating it if needed."""
    global _current
    if _current is None:
        _current = get_session()
    return _current


@wraps(AccountsAPISession.sign_up)
def sign_up(email: str, name: str, password: str) -> SignUpResponse:
    """Wrapper for :meth:`AccountsAPISession.sign_up`."""
    return current_session().sign_up(email, name, password)
