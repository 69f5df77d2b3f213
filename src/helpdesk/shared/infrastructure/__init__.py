"""
Shared Infrastructure
=====================

Logging setup shared by every module.
"""
