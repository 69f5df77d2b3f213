"""
Requests Module
===============

Bounded Context for IT-support requests as seen by the assistant.

Responsibilities:
- Status/priority/type taxonomy with canonical display labels
- Read-only access to stored requests (database or Supabase)
- "My requests" listing with active/resolved views and search
"""
