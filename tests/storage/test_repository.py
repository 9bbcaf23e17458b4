"""
Unit Tests for Template Repositories
"""

import json
import logging

import pytest

from formstamp.errors import RepositoryError
from formstamp.storage import InMemoryTemplateRepository, JsonTemplateRepository


@pytest.fixture
def templates(make_template, make_field):
    """Two templates for owner u1 and one for u2, saved out of order."""
    return [
        make_template([make_field()], template_id="b", name="B", owner_id="u1", created_at="2024-02-01T00:00:00+00:00"),
        make_template([make_field()], template_id="a", name="A", owner_id="u1", created_at="2024-01-01T00:00:00+00:00"),
        make_template([], template_id="c", name="C", owner_id="u2", created_at="2024-03-01T00:00:00+00:00"),
    ]


@pytest.fixture(params=["memory", "json"])
def repo(request, tmp_path):
    if request.param == "memory":
        return InMemoryTemplateRepository()
    return JsonTemplateRepository(tmp_path / "templates")


class TestRepositoryContract:
    """Behaviour shared by every repository."""

    def test_list_when_owner_given_then_scoped_and_oldest_first(self, repo, templates):
        for t in templates:
            repo.save(t)
        assert [t.name for t in repo.list(owner_id="u1")] == ["A", "B"]

    def test_list_when_no_owner_then_all(self, repo, templates):
        for t in templates:
            repo.save(t)
        assert [t.name for t in repo.list()] == ["A", "B", "C"]

    def test_save_when_same_id_then_replaced(self, repo, make_template):
        repo.save(make_template(template_id="x", name="Old"))
        repo.save(make_template(template_id="x", name="New"))
        assert [t.name for t in repo.list()] == ["New"]

    def test_save_when_listed_then_equal_template(self, repo, templates):
        repo.save(templates[0])
        assert repo.list() == [templates[0]]

    def test_delete_when_existing_then_removed(self, repo, templates):
        repo.save(templates[0])
        repo.delete("b")
        assert repo.list() == []

    def test_delete_when_unknown_then_raises_error(self, repo):
        with pytest.raises(RepositoryError, match="not found"):
            repo.delete("missing")

    def test_list_when_empty_then_empty(self, repo):
        assert repo.list() == []


class TestJsonTemplateRepository:
    """Tests specific to the JSON directory repository."""

    def test_save_when_called_then_one_json_file_per_template(self, tmp_path, make_template):
        repo = JsonTemplateRepository(tmp_path)
        repo.save(make_template(template_id="t1"))

        data = json.loads((tmp_path / "t1.json").read_text(encoding="utf-8"))

        assert data["id"] == "t1"
        assert data["createdAt"] == "2024-01-01T00:00:00+00:00"
        assert not list(tmp_path.glob("*.tmp"))

    def test_get_when_saved_then_loaded(self, tmp_path, name_template):
        repo = JsonTemplateRepository(tmp_path)
        repo.save(name_template)
        assert repo.get(name_template.id) == name_template

    def test_get_when_missing_then_raises_error(self, tmp_path):
        with pytest.raises(RepositoryError):
            JsonTemplateRepository(tmp_path).get("nope")

    @pytest.mark.parametrize("bad_id", ["", "../etc", "a/b", ".hidden"])
    def test_save_when_unsafe_id_then_raises_error(self, tmp_path, make_template, bad_id):
        with pytest.raises(RepositoryError, match="Invalid template id"):
            JsonTemplateRepository(tmp_path).save(make_template(template_id=bad_id))

    def test_list_when_file_unreadable_then_skipped_with_warning(self, tmp_path, make_template, caplog):
        # Arrange
        repo = JsonTemplateRepository(tmp_path)
        repo.save(make_template(template_id="good"))
        (tmp_path / "broken.json").write_text("{not json", encoding="utf-8")
        (tmp_path / "invalid.json").write_text(json.dumps({"id": "invalid"}), encoding="utf-8")

        # Act
        with caplog.at_level(logging.WARNING):
            listed = repo.list()

        # Assert
        assert [t.id for t in listed] == ["good"]
        assert "broken.json" in caplog.text
        assert "invalid.json" in caplog.text
