"""
Response Formatter
==================

Fixed assistant texts and the digests built from a user's requests.
"""

from datetime import datetime, tzinfo
from typing import Optional, Sequence

from helpdesk.requests.domain import SupportRequest, split_by_resolution


MAX_LISTED_REQUESTS = 5
UNTITLED_REQUEST = "Solicitação"

NO_REQUESTS_MESSAGE = (
    "Você não possui solicitações registradas no momento. "
    "Gostaria de criar uma nova solicitação?"
)
NO_PENDING_REQUESTS_MESSAGE = "Você não possui solicitações pendentes no momento."
NO_RESOLVED_REQUESTS_MESSAGE = "Você não possui solicitações resolvidas."
STORE_UNAVAILABLE_MESSAGE = (
    "Não foi possível consultar suas solicitações no momento. "
    "Tente novamente mais tarde."
)

CREATE_REQUEST_INSTRUCTIONS = (
    "Para criar uma nova solicitação:\n\n"
    "1. Clique no botão \"Nova Solicitação\" no menu\n"
    "2. Preencha os detalhes do problema\n"
    "3. Selecione o tipo e prioridade\n"
    "4. Anexe arquivos se necessário\n"
    "5. Envie a solicitação\n\n"
    "Você também pode acessar diretamente através do menu lateral."
)

DEFAULT_RESPONSE = (
    "Posso ajudá-lo com:\n\n"
    "🔧 Problemas técnicos (internet, email, impressora, software)\n"
    "📋 Consulta às suas solicitações\n"
    "➕ Orientações para criar nova solicitação\n"
    "📚 Dúvidas gerais sobre TI\n\n"
    "O que você gostaria de saber?"
)

FULL_DETAIL_HINT = 'Para ver mais detalhes, acesse a seção "Minhas Solicitações" no menu.'


class ResponseFormatter:
    """
    Renders request digests in Brazilian Portuguese.

    Requests are listed in the order received; callers pass them newest
    first, as the request store returns them.
    """

    def __init__(
        self,
        max_listed: int = MAX_LISTED_REQUESTS,
        display_timezone: Optional[tzinfo] = None
    ):
        self._max_listed = max_listed
        self._display_timezone = display_timezone

    def format_date(self, value: datetime) -> str:
        """dd/mm/yyyy, converted to the display timezone when one is set."""
        if self._display_timezone is not None and value.tzinfo is not None:
            value = value.astimezone(self._display_timezone)
        return value.strftime("%d/%m/%Y")

    def format_request_list(self, requests: Sequence[SupportRequest], label: str) -> str:
        lines = [f"Suas solicitações {label}:\n\n"]

        for index, request in enumerate(requests[:self._max_listed], 1):
            lines.append(
                f"{index}. {request.title or UNTITLED_REQUEST}\n"
                f"   ID: {request.id}\n"
                f"   Status: {request.status_label}\n"
                f"   Prioridade: {request.priority_label}\n"
                f"   Data: {self.format_date(request.created_at)}\n\n"
            )

        remaining = len(requests) - self._max_listed
        if remaining > 0:
            lines.append(f"... e mais {remaining} solicitações.\n\n")

        lines.append(FULL_DETAIL_HINT)
        return "".join(lines)

    def format_summary(self, requests: Sequence[SupportRequest]) -> str:
        pending, _ = split_by_resolution(requests)
        total = len(requests)
        resolved = total - len(pending)
        return (
            "Resumo das suas solicitações:\n\n"
            f"📋 Total: {total}\n"
            f"⏳ Pendentes: {len(pending)}\n"
            f"✅ Resolvidas: {resolved}\n\n"
            "Gostaria de ver detalhes de alguma categoria específica?"
        )
