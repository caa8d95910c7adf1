"""Profile-aware management of the oh-my-opencode configuration document."""

__version__ = "0.4.0"
