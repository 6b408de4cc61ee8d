"""tickbox: a local-first task list with reminders."""

__version__ = "0.1.0"
