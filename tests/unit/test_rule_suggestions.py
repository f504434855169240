from resume_intake.extraction.missing_content import find_missing_content
from resume_intake.extraction.models import SectionType
from resume_intake.extraction.sections import segment
from resume_intake.suggestions.rules import RuleBasedSuggestionProvider


def _suggest(text: str):
    sections = segment(text)
    return RuleBasedSuggestionProvider().suggest(text, sections, find_missing_content(sections))


class TestRuleBasedSuggestionProvider:
    def test_complete_resume_only_gets_verb_advice(self, resume_text: str) -> None:
        suggestions = _suggest(resume_text)
        assert [s.id for s in suggestions] == ["keyword-action-verbs"]

    def test_missing_required_section_is_critical(self, resume_text: str) -> None:
        text = resume_text.rsplit("\nSkills", 1)[0]
        suggestions = _suggest(text)
        missing = next(s for s in suggestions if s.id == "missing-skills")
        assert missing.priority == "critical"
        assert missing.type == "structure"
        assert missing.section == SectionType.SKILLS
        assert missing.impact == 15
        assert "Programming languages" in missing.description

    def test_missing_recommended_section_is_medium(self, resume_text: str) -> None:
        text = resume_text.replace("Education\nB.Sc. Computer Science, State University 2015\n", "")
        suggestions = _suggest(text)
        missing = next(s for s in suggestions if s.id == "missing-education")
        assert missing.priority == "medium"

    def test_incomplete_core_section_is_high(self) -> None:
        text = "jane@example.com\nExperience\nEngineer at Acme\nSkills\nPython, SQL, Go"
        suggestions = _suggest(text)
        incomplete = next(s for s in suggestions if s.id == "experience-1-incomplete")
        assert incomplete.priority == "high"
        assert incomplete.description == "Add employment dates"

    def test_jargon_density(self) -> None:
        text = "Skills\nleverage synergize paradigm holistic Python"
        ids = [s.id for s in _suggest(text)]
        assert "keyword-jargon" in ids

    def test_long_sentences(self) -> None:
        sentence = " ".join(["word"] * 30) + "."
        ids = [s.id for s in _suggest(sentence)]
        assert "format-sentence-length" in ids

    def test_empty_text_has_no_style_suggestions(self) -> None:
        suggestions = RuleBasedSuggestionProvider().suggest("", [], [])
        assert suggestions == []

    def test_is_deterministic(self, resume_text: str) -> None:
        assert _suggest(resume_text) == _suggest(resume_text)
