"""Unit tests for PromptBuilder."""

import pytest
from jinja2 import TemplateNotFound

from fake_news_pipeline.llm.prompt_builder import UNRESOLVED_VERDICT_FLAG, PromptBuilder
from fake_news_pipeline.models.enums import CANDIDATE_LABELS
from fake_news_pipeline.models.verdict import Verdict


NEWS = "Cientistas descobrem nova espécie de sapo na Amazônia."


class TestClassificationPrompt:
    """Tests for build_classification_prompt()."""

    def test_contains_labels_and_text(self, prompt_builder):
        prompt = prompt_builder.build_classification_prompt(NEWS, CANDIDATE_LABELS)

        assert "notícia verdadeira, notícia falsa" in prompt
        assert f"Texto: {NEWS}" in prompt
        assert prompt.endswith("Categoria:")

    def test_exact_rendering(self, prompt_builder):
        prompt = prompt_builder.build_classification_prompt("abc", ["a", "b"])

        assert prompt == (
            "Classifique o texto abaixo em uma das categorias, escreva a classificação "
            "exatamente com uma das palavras a seguir: a, b.\n"
            "Texto: abc\n"
            "Categoria:"
        )

    def test_text_not_html_escaped(self, prompt_builder):
        prompt = prompt_builder.build_classification_prompt('aspas "duplas" & cia', CANDIDATE_LABELS)
        assert 'aspas "duplas" & cia' in prompt


class TestSummaryPrompt:
    """Tests for build_summary_prompt()."""

    @pytest.mark.parametrize(
        "verdict, flag",
        [
            (Verdict.fake_news(), "isFakeNews:true"),
            (Verdict.true_news(), "isFakeNews:false"),
            (Verdict.unresolved("talvez"), f"isFakeNews:{UNRESOLVED_VERDICT_FLAG}"),
        ],
    )
    def test_verdict_flag(self, prompt_builder, verdict, flag):
        prompt = prompt_builder.build_summary_prompt(NEWS, verdict)

        assert flag in prompt
        assert f"Texto: {NEWS}" in prompt

    def test_default_word_budget(self, prompt_builder):
        prompt = prompt_builder.build_summary_prompt(NEWS, Verdict.true_news())
        assert "no máximo 50 palavras" in prompt

    def test_custom_word_budget(self):
        builder = PromptBuilder(summary_max_words=20)
        prompt = builder.build_summary_prompt(NEWS, Verdict.true_news())
        assert "no máximo 20 palavras" in prompt


class TestTemplatesDir:
    """Tests for loading templates from a custom directory."""

    def test_custom_templates_dir(self, tmp_path):
        (tmp_path / "classification_prompt.txt").write_text(
            "[{{ labels | join('|') }}] {{ text }}", encoding="utf-8"
        )
        (tmp_path / "summary_prompt.txt").write_text(
            "{{ max_words }}/{{ verdict_flag }}: {{ text }}", encoding="utf-8"
        )
        builder = PromptBuilder(templates_dir=tmp_path, summary_max_words=10)

        assert builder.build_classification_prompt("t", ["x", "y"]) == "[x|y] t"
        assert builder.build_summary_prompt("t", Verdict.fake_news()) == "10/true: t"

    def test_missing_templates_raise(self, tmp_path):
        with pytest.raises(TemplateNotFound):
            PromptBuilder(templates_dir=tmp_path)
