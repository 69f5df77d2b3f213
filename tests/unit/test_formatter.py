"""
Tests for request digests.
"""

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from helpdesk.assistant.domain import ResponseFormatter
from helpdesk.assistant.domain.formatter import FULL_DETAIL_HINT


class TestFormatRequestList:

    def test_single_request_layout(self, make_request):
        request = make_request(
            status="em_andamento",
            priority="alta",
            title="Impressora do financeiro",
            request_id="REQ-0042",
            created_at=datetime(2024, 3, 5, 9, 30)
        )

        text = ResponseFormatter().format_request_list([request], "pendentes")

        assert text == (
            "Suas solicitações pendentes:\n\n"
            "1. Impressora do financeiro\n"
            "   ID: REQ-0042\n"
            "   Status: Em Andamento\n"
            "   Prioridade: Alta\n"
            "   Data: 05/03/2024\n\n"
            + FULL_DETAIL_HINT
        )

    def test_lists_at_most_five_and_counts_the_rest(self, make_request):
        requests = [make_request(title=f"Pedido {i}") for i in range(7)]

        text = ResponseFormatter().format_request_list(requests, "pendentes")

        assert "5. Pedido 4\n" in text
        assert "6. " not in text
        assert "... e mais 2 solicitações.\n\n" in text
        assert text.endswith(FULL_DETAIL_HINT)

    def test_exactly_five_has_no_overflow_line(self, make_request):
        requests = [make_request() for _ in range(5)]
        text = ResponseFormatter().format_request_list(requests, "resolvidas")
        assert "... e mais" not in text

    def test_keeps_input_order(self, make_request):
        requests = [make_request(title="Mais novo"), make_request(title="Mais antigo")]
        text = ResponseFormatter().format_request_list(requests, "pendentes")
        assert text.index("1. Mais novo") < text.index("2. Mais antigo")

    def test_untitled_request(self, make_request):
        text = ResponseFormatter().format_request_list([make_request(title=None)], "pendentes")
        assert "1. Solicitação\n" in text

    def test_both_spellings_render_the_same_labels(self, make_request):
        formatter = ResponseFormatter()
        created_at = datetime(2024, 3, 5, 9, 30)
        legacy = formatter.format_request_list(
            [make_request(status="resolvida", priority="baixa", request_id="R1", created_at=created_at)], "resolvidas"
        )
        canonical = formatter.format_request_list(
            [make_request(status="resolved", priority="low", request_id="R1", created_at=created_at)], "resolvidas"
        )

        assert legacy == canonical
        assert "Status: Resolvida" in legacy
        assert "Prioridade: Baixa" in legacy

    def test_unknown_values_are_shown_raw(self, make_request):
        text = ResponseFormatter().format_request_list(
            [make_request(status="archived", priority="urgente")], "pendentes"
        )
        assert "Status: archived" in text
        assert "Prioridade: urgente" in text


class TestFormatDate:

    def test_naive_dates_are_not_converted(self):
        formatter = ResponseFormatter(display_timezone=ZoneInfo("America/Sao_Paulo"))
        assert formatter.format_date(datetime(2024, 3, 5, 1, 0)) == "05/03/2024"

    def test_aware_dates_use_display_timezone(self):
        formatter = ResponseFormatter(display_timezone=ZoneInfo("America/Sao_Paulo"))
        value = datetime(2024, 3, 5, 1, 0, tzinfo=timezone.utc)
        assert formatter.format_date(value) == "04/03/2024"

    def test_without_display_timezone(self):
        value = datetime(2024, 3, 5, 1, 0, tzinfo=timezone.utc)
        assert ResponseFormatter().format_date(value) == "05/03/2024"


class TestFormatSummary:

    def test_counts(self, make_request):
        requests = [
            make_request(status="nova"),
            make_request(status="in_progress"),
            make_request(status="resolvida"),
            make_request(status="closed"),
            make_request(status="fechada"),
        ]

        assert ResponseFormatter().format_summary(requests) == (
            "Resumo das suas solicitações:\n\n"
            "📋 Total: 5\n"
            "⏳ Pendentes: 2\n"
            "✅ Resolvidas: 3\n\n"
            "Gostaria de ver detalhes de alguma categoria específica?"
        )
