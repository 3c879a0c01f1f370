"""Blocking Selenium helpers; callers move them off the event loop."""
