"""
Shared Kernel Module
====================

Shared infrastructure used by both bounded contexts (Requests and Assistant).

Architecture Pattern: Modular Monolith
- Each module (requests, assistant) is a bounded context
- Shared kernel contains only generic infrastructure

DO NOT add request or assistant business logic to the shared kernel.
"""
