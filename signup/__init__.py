"""
Account sign-up form core.

The sign-up package collects identity and credential data for a new account,
validates it locally, submits it to the remote account-creation service, and
manages the loading, success and failure lifecycle of the form with feedback
that is usable by assistive technology.

Context
-------
A user fills in their name, email address, a password (twice), and accepts the
terms of service. On submit the form is validated in full; any problems are
reported per field and focus moves to the first one. A valid form is sent to
the account service. When the service accepts it, the new account is recorded
in the local key-value store, the user's stored profile is brought up to date,
and the user is sent on to the login page.

The presentation layer (components, styling, toasts, routing) is not part of
this package. It is reached through small callables that are passed to
:class:`signup.controllers.signup.SignupController`.
"""
