"""Tests for repository document loading."""

from pathlib import Path

import pytest

from eagov.domain.errors import DanglingReferenceError, DuplicateIdError, RepositoryLoadError
from eagov.infrastructure.loader import load_repository, read_document
from tests.conftest import compliant_document, obj, write_document


class TestReadDocument:
    def test_json(self, tmp_path: Path) -> None:
        path = write_document(tmp_path / "repo.json", compliant_document())
        assert read_document(path) == compliant_document()

    def test_yaml(self, tmp_path: Path) -> None:
        path = write_document(tmp_path / "repo.yaml", compliant_document())
        assert read_document(path) == compliant_document()

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "repo.yml"
        path.write_text("")
        assert read_document(path) == {}

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(RepositoryLoadError, match="Cannot read"):
            read_document(tmp_path / "missing.json")

    def test_malformed_json(self, tmp_path: Path) -> None:
        path = tmp_path / "repo.json"
        path.write_text("{not json")
        with pytest.raises(RepositoryLoadError, match="Cannot parse"):
            read_document(path)

    def test_malformed_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "repo.yaml"
        path.write_text("objects: [unclosed\n")
        with pytest.raises(RepositoryLoadError, match="Cannot parse"):
            read_document(path)

    def test_top_level_must_be_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "repo.json"
        path.write_text("[1, 2]")
        with pytest.raises(RepositoryLoadError, match="must contain a mapping"):
            read_document(path)

    def test_objects_must_be_list(self, tmp_path: Path) -> None:
        path = tmp_path / "repo.json"
        path.write_text('{"objects": {"id": "a"}}')
        with pytest.raises(RepositoryLoadError, match="'objects'"):
            read_document(path)


class TestLoadRepository:
    def test_builds_graph(self, compliant_file: Path) -> None:
        document = load_repository(compliant_file)
        assert len(document.graph) == 5
        assert len(document.graph.relationships()) == 2
        assert document.metadata == {}
        assert document.source == compliant_file

    def test_metadata(self, tmp_path: Path) -> None:
        doc = {**compliant_document(), "metadata": {"governanceMode": "Advisory"}}
        document = load_repository(write_document(tmp_path / "r.yaml", doc))
        assert document.metadata == {"governanceMode": "Advisory"}

    def test_metadata_must_be_mapping(self, tmp_path: Path) -> None:
        doc = {**compliant_document(), "metadata": ["Strict"]}
        with pytest.raises(RepositoryLoadError, match="'metadata'"):
            load_repository(write_document(tmp_path / "r.json", doc))

    def test_duplicate_id_propagates(self, tmp_path: Path) -> None:
        doc = {"objects": [obj("a", "Application"), obj("a", "Application")]}
        with pytest.raises(DuplicateIdError):
            load_repository(write_document(tmp_path / "r.json", doc))

    def test_dangling_reference_propagates(self, tmp_path: Path) -> None:
        doc = {
            "objects": [obj("a", "Application")],
            "relationships": [{"fromId": "a", "toId": "b", "type": "DEPENDS_ON"}],
        }
        with pytest.raises(DanglingReferenceError):
            load_repository(write_document(tmp_path / "r.json", doc))
