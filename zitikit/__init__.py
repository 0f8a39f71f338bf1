"""Identity configuration, enrollment claims, and ping, chat, call and HTTP greeter logic."""

__version__ = "0.1.0"