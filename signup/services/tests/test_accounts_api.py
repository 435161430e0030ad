"""Tests for :mod:`signup.services.accounts_api`."""

from unittest import mock, TestCase
import requests

from signup.services import accounts_api
from signup.services.exceptions import RegistrationFailed
from signup.domain import SignUpResponse

from typing import Any


def _session_returning(mock_session: Any, **kwargs: Any) -> mock.MagicMock:
    mock_post = mock.MagicMock(**kwargs)
    mock_session_instance = mock.MagicMock()
    type(mock_session_instance).post = mock_post
    mock_session.return_value = mock_session_instance
    return mock_post


class TestSignUp(TestCase):
    """The method :meth:`.sign_up` asks the service for a new account."""

    @mock.patch('signup.services.accounts_api.requests.Session')
    def test_returns_reply(self, mock_session: Any) -> None:
        """If the service answers, its reply is returned."""
        mock_json = mock.MagicMock(return_value={'response': 'true'})
        mock_post = _session_returning(mock_session, return_value=mock.MagicMock(
            status_code=200, ok=True, json=mock_json
        ))

        session = accounts_api.AccountsAPISession('http://foo/signup', 5)
        reply = session.sign_up('ada@example.com', 'Ada', 'Analytic1')
        self.assertEqual(reply, SignUpResponse(response='true'))

        args, kwargs = mock_post.call_args
        self.assertEqual(args, ('http://foo/signup',))
        self.assertEqual(kwargs['json'], {'email': 'ada@example.com',
                                          'name': 'Ada',
                                          'password': 'Analytic1'})
        self.assertEqual(kwargs['timeout'], 5)

    @mock.patch('signup.services.accounts_api.requests.Session')
    def test_refusal_is_returned(self, mock_session: Any) -> None:
        """A ``'false'`` reply is left for the caller to interpret."""
        mock_json = mock.MagicMock(return_value={'response': 'false'})
        _session_returning(mock_session, return_value=mock.MagicMock(
            status_code=200, ok=True, json=mock_json
        ))

        session = accounts_api.AccountsAPISession('http://foo/signup')
        reply = session.sign_up('ada@example.com', 'Ada', 'Analytic1')
        self.assertEqual(reply.response, 'false')

    @mock.patch('signup.services.accounts_api.requests.Session')
    def test_error_status(self, mock_session: Any) -> None:
        """If the service responds with an error, it is raised."""
        _session_returning(mock_session, return_value=mock.MagicMock(
            status_code=503, ok=False
        ))

        session = accounts_api.AccountsAPISession('http://foo/signup')
        with self.assertRaises(RegistrationFailed) as cm:
            session.sign_up('ada@example.com', 'Ada', 'Analytic1')
        self.assertIn('503', str(cm.exception))

    @mock.patch('signup.services.accounts_api.requests.Session')
    def test_unreachable(self, mock_session: Any) -> None:
        """If the service cannot be reached, registration fails."""
        _session_returning(mock_session,
                           side_effect=requests.exceptions.ConnectionError)

        session = accounts_api.AccountsAPISession('http://foo/signup')
        with self.assertRaises(RegistrationFailed):
            session.sign_up('ada@example.com', 'Ada', 'Analytic1')

    @mock.patch('signup.services.accounts_api.requests.Session')
    def test_timeout(self, mock_session: Any) -> None:
        """A request that times out is a failed registration."""
        _session_returning(mock_session,
                           side_effect=requests.exceptions.Timeout)

        session = accounts_api.AccountsAPISession('http://foo/signup')
        with self.assertRaises(RegistrationFailed):
            session.sign_up('ada@example.com', 'Ada', 'Analytic1')

    @mock.patch('signup.services.accounts_api.requests.Session')
    def test_unreadable_reply(self, mock_session: Any) -> None:
        """A reply that is not a JSON object cannot be used."""
        for json in [mock.MagicMock(side_effect=ValueError),
                     mock.MagicMock(return_value=['true'])]:
            _session_returning(mock_session, return_value=mock.MagicMock(
                status_code=200, ok=True, json=json
            ))

            session = accounts_api.AccountsAPISession('http://foo/signup')
            with self.assertRaises(RegistrationFailed):
                session.sign_up('ada@example.com', 'Ada', 'Analytic1')


class TestCurrentSession(TestCase):
    """The module-level :func:`.sign_up` reuses one session."""

    def tearDown(self) -> None:
        accounts_api._current = None

    @mock.patch('signup.services.accounts_api.requests.Session')
    def test_reuses_session(self, mock_session: Any) -> None:
        """The same session serves every call."""
        mock_json = mock.MagicMock(return_value={'response': 'ok'})
        _session_returning(mock_session, return_value=mock.MagicMock(
            status_code=201, ok=True, json=mock_json
        ))
        accounts_api._current = None

        accounts_api.sign_up('ada@example.com', 'Ada', 'Analytic1')
        accounts_api.sign_up('bob@example.com', 'Bob', 'Analytic1')
        self.assertEqual(mock_session.call_count, 1)
        self.assertIs(accounts_api.current_session(),
                      accounts_api.current_session())
