"""
Assistant Module
================

Bounded Context for the rule-based IT-support assistant.

Responsibilities:
- Classify a message by keyword (status query, create request,
  knowledge base topic, or nothing)
- Answer status queries from the user's stored requests
- Answer common IT problems from a static knowledge base
- Persist the conversation for the chat transport
"""
