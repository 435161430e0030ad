"""Defines the core data structures for the sign-up form."""

from typing import Any, Dict, NamedTuple, Optional
from datetime import datetime
from enum import Enum
import dateutil.parser
from pytz import UTC


class SubmissionStatus(Enum):
    """Whether a submission is in flight."""

    IDLE = 'idle'
    LOADING = 'loading'


class FormInput(NamedTuple):
    """The values entered into the sign-up form."""

    name: str = ''
    email: str = ''
    password: str = ''
    confirm_password: str = ''
    agree_terms: bool = False


class FormErrors(NamedTuple):
    """
    Field-level error messages for a :class:`.FormInput`.

    A field is valid when its message is ``None``. ``general`` holds problems
    that do not belong to a single input, such as the terms not being accepted
    or the account service refusing the request.
    """

    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    confirm_password: Optional[str] = None
    general: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        """Indicates that no field has an error."""
        return all(message is None for message in self)

    def to_dict(self) -> Dict[str, str]:
        """The populated fields only."""
        return {field: message for field, message
                in self._asdict().items() if message is not None}


class UserProfile(NamedTuple):
    """A profile stored from an earlier visit."""

    display_name: str = ''
    avatar: Optional[str] = None
    language: str = ''
    location: str = ''
    accessibility_needs: str = ''
    bio: str = ''

    @property
    def avatar_fallback(self) -> str:
        """Initial shown in place of the avatar image."""
        if self.display_name:
            return self.display_name[0].upper()
        return 'U'

    def to_dict(self) -> Dict[str, Any]:
        """Generate the stored representation of this profile."""
        return {
            'displayName': self.display_name,
            'avatar': self.avatar,
            'language': self.language,
            'location': self.location,
            'accessibilityNeeds': self.accessibility_needs,
            'bio': self.bio
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'UserProfile':
        """Load a profile from its stored representation."""
        return cls(
            display_name=data.get('displayName') or '',
            avatar=data.get('avatar'),
            language=data.get('language') or '',
            location=data.get('location') or '',
            accessibility_needs=data.get('accessibilityNeeds') or '',
            bio=data.get('bio') or ''
        )


class Account(NamedTuple):
    """Local record of an account created with the account service."""

    name: str
    email: str
    created_at: datetime

    def to_dict(self) -> Dict[str, str]:
        """Generate the stored representation of this account."""
        return {
            'name': self.name,
            'email': self.email,
            'createdAt': self.created_at.isoformat()
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Account':
        """Load an account from its stored representation."""
        created_at = dateutil.parser.parse(data['createdAt'])
        if created_at.tzinfo is None:
            created_at = UTC.localize(created_at)
        return cls(name=data['name'], email=data['email'],
                   created_at=created_at)


class SignUpResponse(NamedTuple):
    """Reply from the account service."""

    response: str
    """The literal string ``'false'`` signals that the account was refused."""
