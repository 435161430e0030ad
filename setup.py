"""Install the sign-up form package."""

from setuptools import setup, find_packages

setup(
    name='signup-form',
    version='0.1.0',
    packages=find_packages(exclude=['*test*']),
    python_requires='>=3.9',
    install_requires=[
        "wtforms",
        "werkzeug",
        "requests",
        "redis",
        "fakeredis",
        "pytz",
        "python-dateutil",
        "python-json-logger",
    ],
    extras_require={
        'test': [
            "pytest",
            "hypothesis",
            "mimesis",
        ]
    },
    zip_safe=False
)
