"""Tests for starter manifest parsing (crateforge.manifest.parser)."""

from __future__ import annotations

import textwrap

import pytest

from crateforge.errors import ManifestParseError
from crateforge.manifest.models import DependencySpec
from crateforge.manifest.parser import parse_starter

pytestmark = pytest.mark.unit


class TestParseStarter:
    def test_simple_and_table_entries(self, starter_manifests):
        deps = parse_starter("web", starter_manifests["web"])
        assert set(deps) == {"axum", "tokio", "serde"}
        assert deps["axum"] == DependencySpec(version="0.7")
        assert deps["tokio"].features == ("macros", "rt-multi-thread")
        assert deps["serde"].version == "1.0"

    def test_missing_dependencies_table_is_empty(self, starter_manifests):
        assert parse_starter("empty", starter_manifests["empty"]) == {}

    def test_empty_text(self):
        assert parse_starter("blank", "") == {}

    def test_hyphenated_default_features(self):
        text = '[dependencies]\nserde = { version = "1", default-features = false }\n'
        deps = parse_starter("s", text)
        assert deps["serde"].default_features is False

    def test_sub_table_form(self):
        text = textwrap.dedent("""\
            [dependencies.local-helpers]
            path = "../helpers"
            optional = true
        """)
        deps = parse_starter("s", text)
        assert deps["local-helpers"].path == "../helpers"
        assert deps["local-helpers"].optional is True
        assert deps["local-helpers"].version is None

    def test_git_source(self):
        text = '[dependencies]\nrocket = { git = "https://github.com/rwf2/Rocket", tag = "v0.5.0" }\n'
        deps = parse_starter("s", text)
        assert deps["rocket"].git == "https://github.com/rwf2/Rocket"
        assert deps["rocket"].tag == "v0.5.0"

    def test_invalid_toml(self, starter_manifests):
        with pytest.raises(ManifestParseError) as exc_info:
            parse_starter("broken", starter_manifests["broken"])
        assert exc_info.value.starter == "broken"

    def test_dependencies_not_a_table(self):
        with pytest.raises(ManifestParseError):
            parse_starter("s", 'dependencies = "serde"\n')

    def test_entry_of_wrong_type(self):
        with pytest.raises(ManifestParseError) as exc_info:
            parse_starter("s", "[dependencies]\nserde = 1\n")
        assert "serde" in str(exc_info.value)

    def test_unknown_key_rejected(self):
        with pytest.raises(ManifestParseError):
            parse_starter("s", '[dependencies]\nserde = { version = "1", flavour = "x" }\n')

    def test_non_boolean_optional_rejected(self):
        with pytest.raises(ManifestParseError):
            parse_starter("s", '[dependencies]\nserde = { version = "1", optional = "yes" }\n')

    def test_features_must_be_strings(self):
        with pytest.raises(ManifestParseError):
            parse_starter("s", '[dependencies]\nserde = { version = "1", features = [1, 2] }\n')

    def test_invalid_version_requirement(self):
        with pytest.raises(ManifestParseError) as exc_info:
            parse_starter("s", '[dependencies]\nserde = "one point oh"\n')
        assert "serde" in str(exc_info.value)

    def test_wildcard_mixed_with_comparators_rejected(self):
        with pytest.raises(ManifestParseError) as exc_info:
            parse_starter("s", '[dependencies]\nfoo = "*, 1.0"\n')
        assert "foo" in str(exc_info.value)
