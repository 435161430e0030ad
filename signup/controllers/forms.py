"""
Validation of the sign-up form.

Every field is checked on each pass, so that all problems are reported at
once. The checks for a single field run in a fixed order and stop at the first
one that fails.
"""

import re
from typing import Any, Callable

from werkzeug.datastructures import MultiDict
from wtforms import BooleanField, Form, PasswordField, StringField
from wtforms.validators import EqualTo, StopValidation

from ..domain import FormErrors, FormInput

WHITESPACE = ('\t\n\v\f\r \u00a0\u1680\u2000\u2001\u2002\u2003\u2004\u2005'
              '\u2006\u2007\u2008\u2009\u200a\u2028\u2029\u202f\u205f\u3000'
              '\ufeff')
"""Whitespace as browsers define it; narrower than :meth:`str.isspace`."""

_NON_SPACE = '[^%s]+' % re.escape(WHITESPACE)
EMAIL_PATTERN = re.compile(rf'{_NON_SPACE}@{_NON_SPACE}\.{_NON_SPACE}')
UPPERCASE = re.compile(r'[A-Z]')
LOWERCASE = re.compile(r'[a-z]')
DIGIT = re.compile(r'[0-9]')
MIN_PASSWORD_LENGTH = 8

TERMS_MESSAGE = 'You must agree to the Terms of Service and Privacy Policy'


def trim(value: str) -> str:
    """Strip leading and trailing :data:`WHITESPACE`."""
    return value.strip(WHITESPACE)


def text_length(value: str) -> int:
    """Length in UTF-16 code units, as counted by the browser."""
    return len(value.encode('utf-16-le')) // 2


class Rule(object):
    """Stop validating a field with ``message`` unless ``check`` passes."""

    def __init__(self, check: Callable[[Any], Any], message: str) -> None:
        self.check = check
        self.message = message

    def __call__(self, form: Form, field: Any) -> None:
        value = field.data if field.data is not None else ''
        if not self.check(value):
            raise StopValidation(self.message)


class SignupForm(Form):
    """Account sign-up form."""

    FIELDS = {
        'name': 'name',
        'email': 'email',
        'password': 'password',
        'confirm_password': 'confirm_password',
        'agree_terms': 'general',
    }
    """Maps form fields to the :class:`.FormErrors` slot for their errors."""

    name = StringField('Full name', validators=[
        Rule(trim, 'Name is required'),
    ])
    email = StringField('Email', validators=[
        Rule(bool, 'Email is required'),
        Rule(EMAIL_PATTERN.search, 'Please enter a valid email address'),
    ])
    password = PasswordField('Password', validators=[
        Rule(bool, 'Password is required'),
        Rule(lambda value: text_length(value) >= MIN_PASSWORD_LENGTH,
             f'Password must be at least {MIN_PASSWORD_LENGTH} characters'),
        Rule(UPPERCASE.search,
             'Password must contain at least one uppercase letter'),
        Rule(LOWERCASE.search,
             'Password must contain at least one lowercase letter'),
        Rule(DIGIT.search, 'Password must contain at least one number'),
    ])
    confirm_password = PasswordField('Confirm password', validators=[
        Rule(bool, 'Please confirm your password'),
        EqualTo('password', message='Passwords do not match'),
    ])
    agree_terms = BooleanField('I agree to the Terms of Service and Privacy'
                               ' Policy', validators=[
                                   Rule(bool, TERMS_MESSAGE),
                               ])

    @classmethod
    def from_domain(cls, form_input: FormInput) -> 'SignupForm':
        """Instantiate this form with data from a domain object."""
        data = MultiDict({
            'name': form_input.name,
            'email': form_input.email,
            'password': form_input.password,
            'confirm_password': form_input.confirm_password,
        })
        if form_input.agree_terms:
            data['agree_terms'] = 'y'
        return cls(data)

    def to_domain(self) -> FormInput:
        """Generate a :class:`.FormInput` from this form's data."""
        return FormInput(
            name=self.name.data or '',
            email=self.email.data or '',
            password=self.password.data or '',
            confirm_password=self.confirm_password.data or '',
            agree_terms=bool(self.agree_terms.data)
        )

    def to_errors(self) -> FormErrors:
        """Collect the first error of each field after :meth:`.validate`."""
        return FormErrors(**{
            self.FIELDS[field]: messages[0]
            for field, messages in self.errors.items()
            if field in self.FIELDS and messages
        })


def validate(form_input: FormInput) -> FormErrors:
    """
    Check every field of ``form_input``.

    Parameters
    ----------
    form_input : :class:`.FormInput`

    Returns
    -------
    :class:`.FormErrors`
        Recomputed from scratch; empty when the form may be submitted.

    """
    form = SignupForm.from_domain(form_input)
    form.validate()
    return form.to_errors()
