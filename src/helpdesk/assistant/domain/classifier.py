"""
Intent Classifier
=================

Keyword-based classification of assistant messages.

Matching is plain substring containment on the lowercased message: no
tokenization, no stemming. A keyword matches wherever it appears, so
"senhas" and "desenhar" both trigger the password topic. That is accepted
behavior.

Evaluation order, first match wins:
1. status query (optionally narrowed to pending or resolved)
2. create-request query
3. knowledge base topic, in table order
4. unclassified
"""

from typing import Tuple

from helpdesk.assistant.domain.entities import ClassificationResult, StatusFilter
from helpdesk.assistant.domain.knowledge_base import KnowledgeBase


STATUS_QUERY_KEYWORDS: Tuple[str, ...] = (
    "minhas solicitações", "meus tickets", "chamados", "requests",
    "status", "andamento", "pendente", "resolvido",
    "solicitação", "ticket", "chamado",
)

CREATE_REQUEST_KEYWORDS: Tuple[str, ...] = (
    "criar solicitação", "nova solicitação", "abrir chamado",
    "criar ticket", "solicitar", "preciso de ajuda",
)

# Prefixes, so "resolvida", "resolvidas", "fechado" all count
PENDING_KEYWORDS: Tuple[str, ...] = ("pendente", "aberta")
RESOLVED_KEYWORDS: Tuple[str, ...] = ("resolvid", "fechad")


def contains_any(text: str, keywords: Tuple[str, ...]) -> bool:
    return any(keyword in text for keyword in keywords)


class IntentClassifier:
    """
    Pure function of the message text; never touches the request store.

    Create-request phrases such as "abrir chamado" contain status keywords
    ("chamado"). Those phrases are removed before looking for status
    keywords, so "quero abrir chamado" is a create-request query while
    "meu chamado está pendente" stays a status query.
    """

    def __init__(self, knowledge_base: KnowledgeBase):
        self._knowledge_base = knowledge_base

    def classify(self, message: str) -> ClassificationResult:
        text = (message or "").lower()

        if self._is_status_query(text):
            return ClassificationResult.status_query(self._status_filter(text))

        if contains_any(text, CREATE_REQUEST_KEYWORDS):
            return ClassificationResult.create_request()

        entry = self._knowledge_base.match(text)
        if entry is not None:
            return ClassificationResult.knowledge_match(entry.category)

        return ClassificationResult.unclassified()

    @staticmethod
    def _is_status_query(text: str) -> bool:
        for phrase in CREATE_REQUEST_KEYWORDS:
            text = text.replace(phrase, " ")
        return contains_any(text, STATUS_QUERY_KEYWORDS)

    @staticmethod
    def _status_filter(text: str) -> StatusFilter:
        if contains_any(text, PENDING_KEYWORDS):
            return StatusFilter.PENDING
        if contains_any(text, RESOLVED_KEYWORDS):
            return StatusFilter.RESOLVED
        return StatusFilter.ALL
