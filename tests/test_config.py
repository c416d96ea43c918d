"""
Tests for document settings and environment overrides.
"""

import pytest
from pydantic import ValidationError

from requesttree import DocumentCore, NodeKind
from requesttree.config import DefaultNames, DocumentSettings, get_settings, load_settings, reset_settings


class TestDocumentSettings:
    def test_defaults(self):
        settings = DocumentSettings()
        assert settings.root_folder_name == "Requests"
        assert settings.default_request_name == "New Request"
        assert settings.default_folder_name == "New Folder"
        assert settings.undo_levels == 0
        assert settings.json_indent == 2
        assert settings.file_extension == ".requesttree"

    def test_empty_default_name_rejected(self):
        with pytest.raises(ValidationError):
            DocumentSettings(default_request_name="")

    def test_negative_levels_rejected(self):
        with pytest.raises(ValidationError):
            DocumentSettings(undo_levels=-1)

    def test_extension_gets_dot(self):
        assert DocumentSettings(file_extension="json").file_extension == ".json"

    def test_frozen(self):
        settings = DocumentSettings()
        with pytest.raises(ValidationError):
            settings.json_indent = 4


class TestEnvironmentOverrides:
    def test_load_from_mapping(self):
        settings = load_settings({"REQUESTTREE_UNDO_LEVELS": "5", "REQUESTTREE_ROOT_FOLDER_NAME": "Collection"})
        assert settings.undo_levels == 5
        assert settings.root_folder_name == "Collection"

    def test_unrelated_variables_ignored(self):
        assert load_settings({"UNDO_LEVELS": "5"}) == DocumentSettings()

    def test_invalid_override(self):
        with pytest.raises(ValidationError):
            load_settings({"REQUESTTREE_JSON_INDENT": "wide"})

    def test_get_settings_reads_environment(self, monkeypatch):
        monkeypatch.setenv("REQUESTTREE_DEFAULT_FOLDER_NAME", "Group")
        reset_settings()
        assert get_settings().default_folder_name == "Group"
        assert DocumentCore().root_folder.name == "Requests"

    def test_get_settings_is_cached(self, monkeypatch):
        first = get_settings()
        monkeypatch.setenv("REQUESTTREE_JSON_INDENT", "8")
        assert get_settings() is first
        reset_settings()
        assert get_settings().json_indent == 8


class TestDefaultNames:
    def test_from_settings(self):
        provider = DefaultNames(DocumentSettings(default_request_name="Untitled"))
        assert provider(NodeKind.REQUEST) == "Untitled"
        assert provider(NodeKind.FOLDER) == "New Folder"

    def test_overrides(self):
        provider = DefaultNames(DocumentSettings(), overrides={NodeKind.FOLDER: "Nuevo"})
        assert provider(NodeKind.FOLDER) == "Nuevo"
        assert provider(NodeKind.REQUEST) == "New Request"

    def test_document_uses_its_settings(self):
        document = DocumentCore(settings=DocumentSettings(default_folder_name="Group", root_folder_name="Mine"))
        document.create_child(NodeKind.FOLDER)
        assert document.root_folder.name == "Mine"
        assert document.root_folder.children[0].name == "Group"
