"""Freelance Tracker: projects, hours and revenue for freelancers."""

__version__ = "1.0.0"
