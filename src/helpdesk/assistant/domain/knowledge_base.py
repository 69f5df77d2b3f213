"""
Knowledge Base
==============

Static catalog of common IT problems: topic -> keywords -> remediation text.

Entries are kept in an explicit order; when a message mentions keywords of
several topics the earliest entry wins. The table is built once and never
changed at runtime.
"""

from pathlib import Path
from typing import Iterator, List, Optional, Sequence, Tuple

import yaml
from pydantic import BaseModel, Field, TypeAdapter

from helpdesk.assistant.domain.entities import KnowledgeEntry
from helpdesk.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


DEFAULT_ENTRIES: Tuple[KnowledgeEntry, ...] = (
    KnowledgeEntry(
        category="internet",
        keywords=("internet", "conexão", "wifi", "rede", "desconectado", "lento", "navegador"),
        responses=(
            "Para problemas de internet:\n"
            "1. Verifique se o cabo de rede está conectado\n"
            "2. Reinicie o roteador\n"
            "3. Verifique as configurações de proxy\n"
            "4. Teste em outro dispositivo\n"
            "5. Entre em contato com o provedor se necessário",
        ),
    ),
    KnowledgeEntry(
        category="email",
        keywords=("email", "outlook", "gmail", "correio", "anexo", "spam"),
        responses=(
            "Para problemas de email:\n"
            "1. Verifique suas credenciais\n"
            "2. Confirme as configurações do servidor\n"
            "3. Verifique a caixa de spam\n"
            "4. Limpe o cache do cliente de email\n"
            "5. Teste o webmail",
        ),
    ),
    KnowledgeEntry(
        category="printer",
        keywords=("impressora", "imprimir", "papel", "tinta", "toner", "scanner"),
        responses=(
            "Para problemas de impressora:\n"
            "1. Verifique se há papel e tinta/toner\n"
            "2. Reinicie a impressora\n"
            "3. Verifique a conexão USB ou rede\n"
            "4. Atualize os drivers\n"
            "5. Limpe a fila de impressão",
        ),
    ),
    KnowledgeEntry(
        category="software",
        keywords=("programa", "software", "aplicativo", "instalar", "atualizar", "erro"),
        responses=(
            "Para problemas de software:\n"
            "1. Reinicie o aplicativo\n"
            "2. Verifique atualizações disponíveis\n"
            "3. Execute como administrador\n"
            "4. Reinstale se necessário\n"
            "5. Verifique compatibilidade do sistema",
        ),
    ),
    KnowledgeEntry(
        category="hardware",
        keywords=("computador", "teclado", "mouse", "monitor", "cpu", "memória", "disco"),
        responses=(
            "Para problemas de hardware:\n"
            "1. Verifique todas as conexões\n"
            "2. Reinicie o equipamento\n"
            "3. Teste com outro cabo/porta\n"
            "4. Verifique indicadores de energia\n"
            "5. Execute diagnósticos do sistema",
        ),
    ),
    KnowledgeEntry(
        category="password",
        keywords=("senha", "password", "login", "acesso", "bloqueado", "esqueci"),
        responses=(
            "Para problemas de senha:\n"
            "1. Use a opção \"Esqueci minha senha\"\n"
            "2. Verifique se o Caps Lock está ativado\n"
            "3. Limpe o cache do navegador\n"
            "4. Contacte o administrador para reset\n"
            "5. Verifique políticas de senha",
        ),
    ),
)


class KnowledgeBase:
    """Ordered, read-only collection of knowledge entries."""

    def __init__(self, entries: Sequence[KnowledgeEntry] = DEFAULT_ENTRIES):
        self._entries: Tuple[KnowledgeEntry, ...] = tuple(entries)
        self._by_category = {entry.category: entry for entry in self._entries}
        if len(self._by_category) != len(self._entries):
            raise ValueError("Knowledge base categories must be unique")

    def __iter__(self) -> Iterator[KnowledgeEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def categories(self) -> List[str]:
        return [entry.category for entry in self._entries]

    def lookup(self, category: str) -> str:
        """Canned response for ``category``; raises KeyError when unknown."""
        return self._by_category[category].response

    def match(self, message: str) -> Optional[KnowledgeEntry]:
        """First entry, in table order, with a keyword contained in the message."""
        lowered = message.lower()
        for entry in self._entries:
            if entry.matches(lowered):
                return entry
        return None


# ========== YAML loading ==========

class KnowledgeEntryConfig(BaseModel):
    """One entry of a knowledge base YAML file."""
    category: str = Field(..., min_length=1)
    keywords: List[str] = Field(..., min_length=1)
    responses: List[str] = Field(..., min_length=1)

    def to_domain(self) -> KnowledgeEntry:
        return KnowledgeEntry(
            category=self.category,
            keywords=tuple(keyword.lower() for keyword in self.keywords),
            responses=tuple(self.responses)
        )


_ENTRY_LIST = TypeAdapter(List[KnowledgeEntryConfig])


def load_knowledge_base(path: Optional[Path] = None) -> KnowledgeBase:
    """
    Build the knowledge base, optionally replacing the built-in table.

    The YAML file holds a list of ``{category, keywords, responses}`` in
    match order. A missing file falls back to the built-in table.
    """
    if path is None:
        return KnowledgeBase()

    if not path.exists():
        logger.warning(f"Knowledge base file not found: {path}, using built-in entries")
        return KnowledgeBase()

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or []

    entries = [config.to_domain() for config in _ENTRY_LIST.validate_python(data)]
    logger.info(
        "Knowledge base loaded",
        extra={"path": str(path), "categories": [entry.category for entry in entries]}
    )
    return KnowledgeBase(entries)
