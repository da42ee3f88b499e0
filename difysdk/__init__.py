"""Client library for Dify chatbot, agent and chatflow applications."""

__version__ = "0.1.0"

__all__ = ["types", "http", "app", "chatbot", "chatflow"]