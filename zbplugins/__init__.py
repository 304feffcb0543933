"""Framework-independent rules, texts and SQLite storage for a set of chat-bot plugins."""

__version__ = "0.1.0"