# ecorater/prompts.py
"""
Prompt text sent to the model.

The rating and identify prompts pin the answer to `Label: value` lines so
`ecorater.extraction` can read them back.
"""
from ecorater.extraction import UNAVAILABLE
from ecorater.models import ExtractedIdentity, ProductQuery

_RATE_ASK = "Rate between 1-5 its eco-friendly ness based on brand ethics and material."


def _field_lines(query: ProductQuery) -> str:
    return "\n".join(f"{name.capitalize()}: {value}" for name, value in query.provided().items())


def raw_prompt(query: ProductQuery) -> str:
    """Original free-text prompt, no answer format."""
    return f"{_field_lines(query)}\n{_RATE_ASK}".strip()


def rating_prompt(query: ProductQuery) -> str:
    return f"""{_field_lines(query)}

{_RATE_ASK}
Answer in exactly this format:
Rating: X/5
Category: <one short product category, e.g. footwear>
<two or three sentences explaining the rating>

X must be a single digit from 1 to 5. Do not use Markdown.""".strip()


def identify_prompt() -> str:
    return """Identify the product shown in this image.
Answer in exactly this format, one field per line:
Brand: <brand name>
Product: <product name or model>
Details: <one sentence describing the product>

If a field cannot be determined, write "unavailable" as its value. Do not use Markdown."""


def search_query(identity: ExtractedIdentity) -> str:
    """Search terms from an identity; empty when neither brand nor product is known."""
    parts = [p for p in (identity.brand, identity.product) if p and p != UNAVAILABLE]
    return " ".join(parts)
