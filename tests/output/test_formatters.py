"""Tests for output mode dispatch."""

import json

from gendocs.output.formatters import OutputSettings, format_result
from gendocs.services.result import ServiceResult

RESULT = ServiceResult.success("create_document", {"name": "Guide", "token": "t1"})


class TestFormatResult:
    def test_default_is_human(self) -> None:
        assert "Document created successfully!" in format_result(RESULT)

    def test_json(self) -> None:
        output = format_result(RESULT, settings=OutputSettings(json_output=True))
        parsed = json.loads(output)
        assert parsed["ok"] is True
        assert parsed["data"]["token"] == "t1"

    def test_json_wins_over_quiet(self) -> None:
        output = format_result(RESULT, settings=OutputSettings(json_output=True, quiet=True))
        assert json.loads(output)["op"] == "create_document"

    def test_quiet(self) -> None:
        assert format_result(RESULT, settings=OutputSettings(quiet=True)) == "t1"
