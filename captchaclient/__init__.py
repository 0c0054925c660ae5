"""Asynchronous client for the 2Captcha captcha solving service."""

__version__ = "0.0.3"

__all__ = ["api", "captchas", "errors", "models", "params", "solver"]