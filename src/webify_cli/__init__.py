"""Webify CLI - turn a GitHub repository into a React web application."""

__version__ = "0.1.0"
