"""
Controller for the sign-up form.

A :class:`.SignupController` lives for one visit to the form. It holds the
values entered so far, validates them when the user submits, and drives the
submission: the call to the account service, the local bookkeeping once the
account exists, and the redirect to the login page. Everything the controller
does outside of its own state goes through the collaborators passed to it, so
that the presentation layer decides how focus, announcements, notifications
and navigation are rendered.

Only one submission is processed at a time. While the account service is being
called the controller is ``LOADING`` and further submit attempts are ignored.
"""

import asyncio
from datetime import datetime
from typing import Any, Callable, Optional, Tuple

from pytz import UTC

from .. import config, logging
from ..domain import Account, FormErrors, FormInput, SubmissionStatus, \
    UserProfile
from ..services.exceptions import EmailAlreadyInUse, MalformedRecord, \
    RegistrationFailed, StorageFailed
from ..services.store import UserRepository
from . import forms
from .feedback import StatusAnnouncer, field_attributes, focus_target

logger = logging.getLogger(__name__)

VALIDATION_FAILED = 'Form validation failed. Please correct the errors.'
CREATING = 'Creating your account, please wait...'
CREATED = 'Account created successfully. Redirecting to login page.'
FAILED = 'Failed to create account. Please try again.'

FAILURE_SENTINEL = 'false'
"""Value of :attr:`.SignUpResponse.response` when the service refuses."""


class SignupController(object):
    """
    State machine for one sign-up form session.

    Parameters
    ----------
    accounts : object
        Account service with a ``sign_up(email, name, password)`` method that
        returns a :class:`.SignUpResponse`, such as
        :class:`signup.services.accounts_api.AccountsAPISession`.
    users : :class:`.UserRepository`
        Where accounts and the user profile are recorded.
    notify : callable
        Called with ``title`` and ``description`` keyword arguments to show a
        notification.
    go_to : callable
        Called with a path to navigate away from the form.
    focus : callable
        Called with the name of the field that should receive focus.
    on_status : callable
        Called with every new live-region message, or None when cleared.

    """

    def __init__(self, accounts: Any, users: UserRepository,
                 notify: Callable[..., None],
                 go_to: Callable[[str], None],
                 focus: Optional[Callable[[str], None]] = None,
                 on_status: Optional[Callable[[Optional[str]], None]] = None,
                 settle_delay: float = config.SUBMIT_SETTLE_DELAY,
                 redirect_delay: float = config.REDIRECT_DELAY,
                 message_timeout: float = config.STATUS_MESSAGE_TIMEOUT,
                 login_path: str = config.LOGIN_PATH) -> None:
        self.form = FormInput()
        self.status = SubmissionStatus.IDLE
        self.errors = FormErrors()
        self.profile: Optional[UserProfile] = None
        self.focused: Optional[str] = None
        self.announcer = StatusAnnouncer(on_status, message_timeout)
        self.settle_delay = settle_delay
        self.redirect_delay = redirect_delay
        self.login_path = login_path

        self._accounts = accounts
        self._users = users
        self._notify = notify
        self._go_to = go_to
        self._focus = focus
        self._redirect: Optional[asyncio.TimerHandle] = None
        self._closed = False

    @property
    def status_message(self) -> Optional[str]:
        """The message currently exposed to assistive technology."""
        return self.announcer.message

    @property
    def avatar(self) -> Optional[Tuple[str, str]]:
        """Avatar URL and fallback initial, if the profile has an avatar."""
        if self.profile is None or not self.profile.avatar:
            return None
        return self.profile.avatar, self.profile.avatar_fallback

    def load(self) -> None:
        """Start the session: pre-fill from the stored profile, focus name."""
        try:
            self.profile = self._users.load_profile()
        except (MalformedRecord, StorageFailed) as e:
            logger.error('Failed to load profile data: %s', e)
            self.profile = None
        if self.profile is not None and self.profile.display_name:
            self.form = self.form._replace(name=self.profile.display_name)
        self._set_focus('name')

    def update(self, **fields: Any) -> FormInput:
        """Record edits to the form fields."""
        self.form = self.form._replace(**fields)
        return self.form

    def attributes(self, field: str) -> dict:
        """ARIA attributes for the input of ``field``."""
        return field_attributes(self.errors, field)

    async def attempt_submit(self, form_input: Optional[FormInput] = None) \
            -> None:
        """
        Validate and submit the form.

        Parameters
        ----------
        form_input : :class:`.FormInput`
            Values to submit. Defaults to the values recorded with
            :meth:`.update`.

        """
        if self._closed:
            logger.debug('Form session is closed; ignoring submit')
            return
        if self.status is SubmissionStatus.LOADING:
            logger.debug('Submission already in progress; ignoring submit')
            return
        if form_input is None:
            form_input = self.form

        self._set_errors(forms.validate(form_input))
        if not self.errors.is_empty:
            logger.debug('Sign-up form not valid: %s',
                         sorted(self.errors.to_dict()))
            self.announcer.announce(VALIDATION_FAILED)
            return

        logger.debug('Sign-up form is valid')
        self.status = SubmissionStatus.LOADING
        self.announcer.announce(CREATING)
        try:
            await self._create_account(form_input)
        except Exception as e:
            logger.error('Sign-up failed: %s', e)
            if not self._closed:
                self._set_errors(FormErrors(general=str(e) or FAILED))
                self.announcer.announce(FAILED)
        finally:
            self.status = SubmissionStatus.IDLE

    def close(self) -> None:
        """End the session; pending timers are cancelled."""
        self._closed = True
        self.announcer.close()
        if self._redirect is not None:
            self._redirect.cancel()
            self._redirect = None

    async def _create_account(self, form_input: FormInput) -> None:
        reply = await asyncio.to_thread(self._accounts.sign_up,
                                        form_input.email, form_input.name,
                                        form_input.password)
        if reply.response == FAILURE_SENTINEL:
            raise RegistrationFailed(
                f'API call failed with server response:{reply.response}'
            )

        await asyncio.sleep(self.settle_delay)
        if self._closed:
            logger.debug('Form session closed before sign-up completed')
            return

        account = Account(name=form_input.name, email=form_input.email,
                          created_at=datetime.now(tz=UTC))
        users = self._users.load_users()
        if any(user.email == account.email for user in users):
            # The account service has already accepted this account.
            logger.warning('Account service created %s, but it is already'
                           ' recorded locally', account.email)
            raise EmailAlreadyInUse('Email already in use')
        users.append(account)
        self._users.save_users(users)

        if self.profile is not None \
                and self.profile.display_name != account.name:
            self.profile = self.profile._replace(display_name=account.name)
            self._users.save_profile(self.profile)

        self._notify(title='Account created',
                     description='Your account has been created successfully.'
                                 ' Please log in.')
        self.announcer.announce(CREATED, transient=False)
        logger.debug('Created account for %s', account.email)

        loop = asyncio.get_running_loop()
        self._redirect = loop.call_later(self.redirect_delay, self._navigate)

    def _navigate(self) -> None:
        self._redirect = None
        logger.debug('Redirecting to %s', self.login_path)
        self._go_to(self.login_path)
        self.close()

    def _set_errors(self, errors: FormErrors) -> None:
        self.errors = errors
        target = focus_target(errors)
        if target is not None:
            self._set_focus(target)

    def _set_focus(self, target: str) -> None:
        self.focused = target
        if self._focus is not None:
            self._focus(target)
