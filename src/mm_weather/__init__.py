"""Mattermost slash-command relay for weatherapi.com current conditions."""

__version__ = "0.1.0"
