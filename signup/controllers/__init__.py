"""Request controllers for the sign-up form."""
