"""Integrations with services outside of the sign-up form."""
