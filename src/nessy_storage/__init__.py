"""Persistent storage for the Nessy emulator front-end."""
