"""
Test dell'estrazione campi con client OpenAI simulato.
"""

import json
from unittest.mock import MagicMock

import pytest

from app.services.ai_service import (
    AiExtractionError,
    build_prompt,
    parse_ai_response,
    parse_ddt_with_ai,
)


def _client_returning(content):
    client = MagicMock()
    message = MagicMock()
    message.content = content
    choice = MagicMock()
    choice.message = message
    client.chat.completions.create.return_value = MagicMock(choices=[choice])
    return client


class TestParseAiResponse:
    def test_fields_normalized(self):
        content = json.dumps({
            "committente": " Cati S.p.A. ",
            "destinatario": {
                "ragioneSociale": "Delta Store",
                "cap": "CAP 24100",
                "citta": "Bergamo",
                "provincia": "(bg)",
            },
            "dataDDT": "05/03/2024",
            "numeroDDT": 1234,
            "colli": "3",
            "peso": "12,5 kg",
        })

        fields = parse_ai_response(content)

        assert fields == {
            "committente": "Cati S.p.A.",
            "destinatario": {
                "ragioneSociale": "Delta Store",
                "cap": "24100",
                "citta": "Bergamo",
                "provincia": "BG",
            },
            "dataDDT": "2024-03-05",
            "numeroDDT": "1234",
            "colli": 3,
            "peso": 12.5,
        }

    def test_absent_fields_are_not_invented(self):
        fields = parse_ai_response('{"numeroDDT": "A7", "contrassegno": null, "destinatario": {}}')

        assert fields == {"numeroDDT": "A7"}

    def test_thousands_separator(self):
        assert parse_ai_response('{"peso": "1.234,50"}') == {"peso": 1234.5}

    def test_unparseable_date_is_dropped(self):
        assert parse_ai_response('{"dataDDT": "ieri", "colli": 2}') == {"colli": 2}

    def test_invalid_field_dropped_others_kept(self):
        fields = parse_ai_response('{"committente": "Cati", "numeroDDT": "12", "colli": 2.5, "peso": 10}')

        assert fields == {"committente": "Cati", "numeroDDT": "12", "peso": 10.0}

    def test_recipient_as_plain_string_dropped(self):
        fields = parse_ai_response(
            '{"committente": "Cati", "numeroDDT": "12", "destinatario": "Delta Store, Bergamo"}'
        )

        assert fields == {"committente": "Cati", "numeroDDT": "12"}

    def test_invalid_nested_field_keeps_rest_of_recipient(self):
        fields = parse_ai_response(
            '{"destinatario": {"ragioneSociale": "Delta Store", "citta": ["Bergamo"]}, "colli": 1}'
        )

        assert fields == {"destinatario": {"ragioneSociale": "Delta Store"}, "colli": 1}

    def test_dropped_fields_are_logged(self, caplog):
        with caplog.at_level("WARNING", logger="app.services.ai_service"):
            parse_ai_response('{"numeroDDT": "12", "colli": [3]}')

        record = next(r for r in caplog.records if r.name == "app.services.ai_service")
        assert record.dropped_fields == ["colli"]

    @pytest.mark.parametrize(
        "raw, expected",
        [("Milano (MI)", "MI"), ("bg", "BG"), ("(co)", "CO"), ("BG24", "BG"), ("Milano", None)],
    )
    def test_provincia_code(self, raw, expected):
        fields = parse_ai_response(json.dumps({"destinatario": {"ragioneSociale": "Delta", "provincia": raw}}))

        assert fields["destinatario"].get("provincia") == expected

    def test_invalid_json(self):
        with pytest.raises(AiExtractionError):
            parse_ai_response("non json")

    def test_json_not_an_object(self):
        with pytest.raises(AiExtractionError):
            parse_ai_response("[1, 2]")


class TestParseDdtWithAi:
    def test_calls_model_with_json_response_format(self, app):
        client = _client_returning('{"committente": "Cati"}')

        assert parse_ddt_with_ai("DDT n. 12", client=client) == {"committente": "Cati"}

        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-5"
        assert kwargs["response_format"] == {"type": "json_object"}
        assert kwargs["max_completion_tokens"] == 2048
        assert "DDT n. 12" in kwargs["messages"][0]["content"]

    def test_client_failure_becomes_extraction_error(self, app):
        client = MagicMock()
        client.chat.completions.create.side_effect = RuntimeError("timeout")

        with pytest.raises(AiExtractionError):
            parse_ddt_with_ai("testo", client=client)

    def test_empty_content(self, app):
        with pytest.raises(AiExtractionError):
            parse_ddt_with_ai("testo", client=_client_returning(""))


def test_prompt_contains_page_text():
    prompt = build_prompt("Mittente: Cati")
    assert prompt.endswith("Mittente: Cati")
    assert '"ragioneSociale"' in prompt
