"""Ticket workflow automation service."""
