"""Mirror cluster platform users into a downstream single-sign-on provider."""

__version__ = "0.1.0"
