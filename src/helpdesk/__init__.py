"""
Helpdesk Assistant
==================

IT-support request desk with a keyword-driven assistant.
"""

__version__ = "1.0.0"
