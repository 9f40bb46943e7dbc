"""
Prompt builder for LLM requests.

Responsible for:
- Loading and rendering Jinja2 templates (classification + summary prompts)
- Embedding the candidate labels into the classification prompt
- Embedding the upstream verdict flag and word budget into the summary prompt
"""

from pathlib import Path
from typing import Optional, Sequence

import structlog
from jinja2 import Environment, FileSystemLoader

from fake_news_pipeline.models.verdict import Verdict


logger = structlog.get_logger(__name__)

DEFAULT_TEMPLATES_DIR = Path(__file__).parent / "templates"
CLASSIFICATION_TEMPLATE = "classification_prompt.txt"
SUMMARY_TEMPLATE = "summary_prompt.txt"

# Flag rendered for a verdict the classifier could not resolve
UNRESOLVED_VERDICT_FLAG = "indeterminado"


class PromptBuilder:
    """
    Build prompts for the classifier and summarizer stages.

    Pure string templating: no network access, no state besides the
    loaded templates.
    """

    def __init__(
        self,
        templates_dir: Optional[Path] = None,
        summary_max_words: int = 50,
    ):
        """
        Initialize prompt builder.

        Args:
            templates_dir: Directory containing prompt templates
                (defaults to the templates shipped with the package)
            summary_max_words: Word budget requested in the summary prompt.
                Instruction only, the summary length is not enforced.
        """
        self.templates_dir = Path(templates_dir) if templates_dir else DEFAULT_TEMPLATES_DIR
        self.summary_max_words = summary_max_words

        # Load Jinja2 environment
        self.jinja_env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            trim_blocks=True,
            lstrip_blocks=True,
            autoescape=False  # We're generating prompts, not HTML
        )

        # Load templates
        try:
            self.classification_template = self.jinja_env.get_template(CLASSIFICATION_TEMPLATE)
            self.summary_template = self.jinja_env.get_template(SUMMARY_TEMPLATE)
            logger.info("Loaded prompt templates", templates_dir=str(self.templates_dir))
        except Exception as e:
            logger.error("Failed to load prompt templates", error=str(e))
            raise

    def build_classification_prompt(self, text: str, labels: Sequence[str]) -> str:
        """
        Build the classification prompt.

        Args:
            text: Sanitized news text
            labels: Candidate labels the model must answer with

        Returns:
            Rendered prompt
        """
        rendered = self.classification_template.render(
            text=text,
            labels=list(labels),
        ).strip()

        logger.debug(
            "Classification prompt built",
            labels_count=len(labels),
            text_length=len(text),
            prompt_length=len(rendered),
        )
        return rendered

    def build_summary_prompt(self, text: str, verdict: Verdict) -> str:
        """
        Build the summary prompt.

        The verdict flag lets the model tailor the tone of the summary.

        Args:
            text: Sanitized news text
            verdict: Verdict produced by the classifier

        Returns:
            Rendered prompt
        """
        if verdict.is_resolved:
            verdict_flag = "true" if verdict.is_fake_news else "false"
        else:
            verdict_flag = UNRESOLVED_VERDICT_FLAG

        rendered = self.summary_template.render(
            text=text,
            verdict_flag=verdict_flag,
            max_words=self.summary_max_words,
        ).strip()

        logger.debug(
            "Summary prompt built",
            verdict=verdict.kind.value,
            text_length=len(text),
            prompt_length=len(rendered),
        )
        return rendered
