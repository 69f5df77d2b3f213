"""
Request Taxonomy
================

Canonical enums for request status, priority and type.

Requests written by older clients store Portuguese spellings ("resolvida",
"alta") while newer ones store English ones ("resolved", "high"). Each enum
member is the canonical value; the legacy spelling parses to the same member,
so both spellings share one display label.
"""

from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Union


class _LegacyAliasEnum(str, Enum):
    """str Enum that also accepts the legacy spelling of each value."""

    @classmethod
    def _aliases(cls) -> Mapping[str, str]:
        return {}

    @classmethod
    def _missing_(cls, value):
        canonical = cls._aliases().get(value)
        if canonical is None:
            return None
        return cls(canonical)

    @classmethod
    def parse(cls, value: object) -> Optional["_LegacyAliasEnum"]:
        """Return the member for either spelling, or None when unknown."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


class RequestStatus(_LegacyAliasEnum):
    """Request lifecycle statuses."""
    NEW = "new"
    ASSIGNED = "assigned"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
    CLOSED = "closed"

    @classmethod
    def _aliases(cls) -> Mapping[str, str]:
        return _STATUS_ALIASES


class RequestPriority(_LegacyAliasEnum):
    """Request priority levels."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def _aliases(cls) -> Mapping[str, str]:
        return _PRIORITY_ALIASES


class RequestType(_LegacyAliasEnum):
    """Kinds of request a user can open."""
    GENERAL = "geral"
    SYSTEMS = "sistemas"
    STOCK_ADJUSTMENT = "ajuste_estoque"
    EQUIPMENT = "solicitacao_equipamento"
    PREVENTIVE_MAINTENANCE = "manutencao_preventiva"
    INVENTORY = "inventory"
    SYSTEM = "system"
    EMERGENCY = "emergency"
    OTHER = "other"


_STATUS_ALIASES: Mapping[str, str] = MappingProxyType({
    "nova": "new",
    "atribuida": "assigned",
    "em_andamento": "in_progress",
    "resolvida": "resolved",
    "fechada": "closed",
})

_PRIORITY_ALIASES: Mapping[str, str] = MappingProxyType({
    "baixa": "low",
    "media": "medium",
    "alta": "high",
})

STATUS_LABELS: Mapping[RequestStatus, str] = MappingProxyType({
    RequestStatus.NEW: "Nova",
    RequestStatus.ASSIGNED: "Atribuída",
    RequestStatus.IN_PROGRESS: "Em Andamento",
    RequestStatus.RESOLVED: "Resolvida",
    RequestStatus.CLOSED: "Fechada",
})

PRIORITY_LABELS: Mapping[RequestPriority, str] = MappingProxyType({
    RequestPriority.LOW: "Baixa",
    RequestPriority.MEDIUM: "Média",
    RequestPriority.HIGH: "Alta",
})

TYPE_LABELS: Mapping[RequestType, str] = MappingProxyType({
    RequestType.GENERAL: "Geral",
    RequestType.SYSTEMS: "Sistemas",
    RequestType.STOCK_ADJUSTMENT: "Ajuste de Estoque",
    RequestType.EQUIPMENT: "Solicitação de Equipamento",
    RequestType.PREVENTIVE_MAINTENANCE: "Manutenção Preventiva",
    RequestType.INVENTORY: "Inventário",
    RequestType.SYSTEM: "Sistema",
    RequestType.EMERGENCY: "Emergência",
    RequestType.OTHER: "Outro",
})

RESOLVED_STATUSES = frozenset({RequestStatus.RESOLVED, RequestStatus.CLOSED})

StatusValue = Union[RequestStatus, str]
PriorityValue = Union[RequestPriority, str]
TypeValue = Union[RequestType, str]


def coerce_status(value: str) -> StatusValue:
    """Parse a stored status, keeping unknown values as the raw string."""
    return RequestStatus.parse(value) or value


def coerce_priority(value: str) -> PriorityValue:
    """Parse a stored priority, keeping unknown values as the raw string."""
    return RequestPriority.parse(value) or value


def coerce_type(value: str) -> TypeValue:
    """Parse a stored request type, keeping unknown values as the raw string."""
    return RequestType.parse(value) or value


def translate_status(status: StatusValue) -> str:
    """Display label for a status in either spelling; unknown values pass through."""
    member = RequestStatus.parse(status)
    if member is None:
        return str(status)
    return STATUS_LABELS[member]


def translate_priority(priority: PriorityValue) -> str:
    """Display label for a priority in either spelling; unknown values pass through."""
    member = RequestPriority.parse(priority)
    if member is None:
        return str(priority)
    return PRIORITY_LABELS[member]


def translate_type(request_type: TypeValue) -> str:
    """Display label for a request type; unknown values pass through."""
    member = RequestType.parse(request_type)
    if member is None:
        return str(request_type)
    return TYPE_LABELS[member]


def is_resolved_status(status: StatusValue) -> bool:
    """True for resolved or closed requests, in either spelling."""
    return RequestStatus.parse(status) in RESOLVED_STATUSES
