"""Admin client and CLI for the newsdesk publishing platform."""

__version__ = "0.1.0"
