"""Signup Portal UI: public signup site, admin panel and blog CMS front-end."""

__version__ = "1.0.0"
