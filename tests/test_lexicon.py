"""Tests for lexicon loading."""

from voicenotes.actions import extract_action_items
from voicenotes.lexicon import load_lexicon
from voicenotes.models import Priority


class TestLoadLexicon:
    """Tests for load_lexicon function."""

    def test_bundled_lexicon(self):
        """Verify the bundled tables load with their declared order."""
        lexicon = load_lexicon()
        assert lexicon.version == "1.0"
        assert lexicon.action_triggers[0] == ("urgent", Priority.URGENT)
        assert lexicon.contextual_keywords[0][0] == "meeting"
        assert "John" in lexicon.first_names

    def test_yaml_keywords_stay_strings(self):
        """Verify words YAML treats specially are loaded as plain words."""
        lexicon = load_lexicon()
        assert "on" in lexicon.stopwords
        assert ("idea", "Ideas & Thoughts") in lexicon.title_rules

    def test_cached_per_path(self):
        assert load_lexicon() is load_lexicon()

    def test_missing_custom_file_falls_back(self, tmp_path):
        lexicon = load_lexicon(str(tmp_path / "missing.yaml"))
        assert lexicon.version == "1.0"

    def test_custom_file(self, tmp_path):
        """Verify a custom file replaces the bundled tables."""
        path = tmp_path / "lexicon.yaml"
        path.write_text(
            """
version: "2.0"
action_triggers:
  - [ping, Urgent]
"""
        )

        lexicon = load_lexicon(str(path))

        assert lexicon.version == "2.0"
        assert lexicon.action_triggers == (("ping", Priority.URGENT),)
        items = extract_action_items("Please ping Sam about it", lexicon)
        assert len(items) == 1
        assert items[0].priority == Priority.URGENT
        assert items[0].category == "General"

    def test_invalid_yaml_falls_back(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("invalid: yaml: content: [")
        assert load_lexicon(str(path)).version == "1.0"

    def test_unknown_priority_falls_back(self, tmp_path):
        path = tmp_path / "bad-priority.yaml"
        path.write_text('version: "3.0"\naction_triggers:\n  - [ping, Whenever]\n')
        assert load_lexicon(str(path)).version == "1.0"

    def test_non_mapping_document_falls_back(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- just\n- a list\n")
        assert load_lexicon(str(path)).version == "1.0"
