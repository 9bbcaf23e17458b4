"""
Unit Tests for Single and Bulk Document Generation

Bulk tests inject a mock sleep so pacing is checked without waiting.
"""

from unittest.mock import MagicMock, call, patch

import pytest

from formstamp.composer.controller import deliver_document, generate_all, generate_document
from formstamp.composer.layout import RenderConfig
from formstamp.composer.output import CollectingSink
from formstamp.core.models.records import DataRecord
from formstamp.errors import BatchGenerationError, GenerationError


@pytest.fixture
def three_templates(make_template, make_field):
    return [
        make_template([make_field("fullName")], name=name, template_id=f"t{i}")
        for i, name in enumerate(["Kuwait A", "Kuwait B", "Kuwait C"])
    ]


class TestGenerateDocument:
    """Tests for generate_document() / deliver_document()."""

    def test_generate_when_valid_then_pdf_and_metadata(self, name_template, john_smith):
        generated = generate_document(name_template, john_smith)
        assert generated.data.startswith(b"%PDF-")
        assert generated.filename == "JOHN SMITH_Kuwait A.pdf"
        assert generated.page_count == 1
        assert generated.template_id == "t1"

    def test_generate_when_render_fails_then_generation_error(self, name_template, john_smith):
        with patch("formstamp.composer.controller.render_pdf", side_effect=RuntimeError("disk full")):
            with pytest.raises(GenerationError, match="disk full") as exc_info:
                generate_document(name_template, john_smith)
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_deliver_when_called_then_sink_receives_document(self, name_template, john_smith):
        sink = CollectingSink()
        generated = deliver_document(name_template, john_smith, sink)
        assert sink.documents == [(generated.filename, generated.data)]


class TestGenerateAll:
    """Tests for generate_all()."""

    def test_generate_all_when_three_templates_then_three_outputs_two_pauses(self, three_templates, john_smith):
        # Arrange
        sink = CollectingSink()
        sleep = MagicMock()

        # Act
        result = generate_all(three_templates, john_smith, sink, sleep=sleep)

        # Assert
        assert result.count == 3
        assert sink.filenames == [
            "JOHN SMITH_Kuwait A.pdf",
            "JOHN SMITH_Kuwait B.pdf",
            "JOHN SMITH_Kuwait C.pdf",
        ]
        assert list(result.filenames) == sink.filenames
        assert sleep.call_args_list == [call(0.5), call(0.5)]

    def test_generate_all_when_pause_then_between_deliveries(self, three_templates, john_smith):
        """Each pause happens after the previous document was delivered."""
        events = []
        sink = lambda filename, data: events.append(("deliver", filename))  # noqa: E731
        sleep = lambda seconds: events.append(("sleep", seconds))  # noqa: E731

        generate_all(three_templates, john_smith, sink, sleep=sleep)

        assert [kind for kind, _ in events] == ["deliver", "sleep", "deliver", "sleep", "deliver"]

    def test_generate_all_when_delay_zero_then_no_pauses(self, three_templates, john_smith):
        sleep = MagicMock()
        generate_all(three_templates, john_smith, CollectingSink(), RenderConfig(bulk_delay_seconds=0), sleep=sleep)
        sleep.assert_not_called()

    def test_generate_all_when_second_fails_then_aborts_keeping_first(self, three_templates, john_smith):
        # Arrange
        sink = CollectingSink()
        sleep = MagicMock()
        outcomes = [b"%PDF-first", RuntimeError("boom"), b"%PDF-third"]

        # Act
        with patch("formstamp.composer.controller.render_pdf", side_effect=outcomes) as render:
            with pytest.raises(BatchGenerationError) as exc_info:
                generate_all(three_templates, john_smith, sink, sleep=sleep)

        # Assert
        error = exc_info.value
        assert error.template_name == "Kuwait B"
        assert error.delivered == 1
        assert isinstance(error.cause, GenerationError)
        assert sink.documents == [("JOHN SMITH_Kuwait A.pdf", b"%PDF-first")]
        assert render.call_count == 2

    def test_generate_all_when_sink_fails_then_batch_error(self, three_templates, john_smith):
        sink = MagicMock(side_effect=OSError("read-only"))
        with pytest.raises(BatchGenerationError) as exc_info:
            generate_all(three_templates, john_smith, sink, sleep=MagicMock())
        assert exc_info.value.template_name == "Kuwait A"
        assert exc_info.value.delivered == 0

    def test_generate_all_when_no_templates_then_raises_error(self, john_smith):
        with pytest.raises(GenerationError, match="No templates found"):
            generate_all([], john_smith, CollectingSink(), sleep=MagicMock())

    def test_generate_all_when_empty_record_then_export_names(self, three_templates):
        result = generate_all(three_templates, DataRecord(), CollectingSink(), sleep=MagicMock())
        assert result.filenames[0] == "Export_Kuwait A.pdf"
