"""Persistent channel: broadcast hub, message protocol and dispatcher."""
