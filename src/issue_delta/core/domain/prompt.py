from __future__ import annotations


def build_polish_prompt(*, facts: str) -> str:
    """Build the rephrasing prompt around a fixed fact skeleton."""
    body = (
        "You are a code reviewer writing a short summary of how a codebase changed "
        "between two uploaded versions.\n\n"
        "The comparison below was computed by a deterministic engine. It is the only "
        "source of truth.\n\n"
        "# Rules\n"
        "- Rephrase the summary into clear, friendly prose for a developer.\n"
        "- Keep the section headings and their counts exactly as written.\n"
        "- Mention every issue code exactly as written (e.g. NESTED_LOOP), once, under its own "
        "section heading, and no others.\n"
        "- Keep every 'from X to Y' value pair exactly as written.\n"
        "- Do not change any direction: an improvement stays an improvement, a regression "
        "stays a regression, an unchanged issue stays unchanged.\n"
        "- Do not add new findings, severities, numbers or recommendations.\n"
        "- Respond with markdown only.\n"
    )
    body += "\n\n--- COMPARISON FACTS ---\n" + facts
    return body
