"""Ambient plumbing: settings, logging and the library error taxonomy."""
