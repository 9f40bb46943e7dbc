"""
Fake-news analysis pipeline.

Three HTTP services chained in a line:
- Gateway: sanitizes and rate limits public requests (POST /analisar)
- Classifier: asks a local LLM whether the text is true or fake news (POST /classify)
- Summarizer: asks the same LLM for a short summary (POST /summarize)

Architecture: one FastAPI app per stage, selected by STAGE, with Ollama
as the inference backend.
"""

__version__ = "1.0.0"
