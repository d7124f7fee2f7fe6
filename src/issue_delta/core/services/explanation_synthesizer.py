from __future__ import annotations

import re
from collections import Counter
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeoutError
from datetime import datetime, timezone
from typing import Callable, Optional, Sequence

from ..domain.models import ChangeType, Comparison, Explanation, IssueCode, ResultEntry
from ..ports import ExplanationStorePort, LoggerPort, ProsePolisherPort

TITLE = "## Code Review Comparison Summary"

# Fixed group order and headings
_GROUPS: tuple[tuple[ChangeType, str], ...] = (
    (ChangeType.IMPROVED, "Improvements"),
    (ChangeType.WORSENED, "Regressions"),
    (ChangeType.UNCHANGED, "Unchanged"),
)

_EMPTY_NOTE = "No issues were detected in either version."

_ISSUE_CODE_RE = re.compile(r"\b(" + "|".join(code.value for code in IssueCode) + r")\b")

_HEADING_RE = re.compile(
    r"^[ \t]*#{1,6}[ \t]*(" + "|".join(heading for _, heading in _GROUPS) + r")[ \t]*\((\d+)\)[ \t]*$",
    re.MULTILINE,
)


def describe_entry(entry: ResultEntry) -> str:
    """One-line deterministic fact for a result entry."""
    if entry.change_type is ChangeType.UNCHANGED:
        return "No change detected."

    if entry.change_type is ChangeType.IMPROVED:
        if entry.after_severity is None:
            return "Issue resolved."
        if entry.before_severity != entry.after_severity:
            return f"Severity reduced from {entry.before_severity.value} to {entry.after_severity.value}."
        return f"Complexity reduced from {entry.before_complexity.value} to {entry.after_complexity.value}."

    if entry.before_severity is None:
        return "New issue introduced."
    if entry.before_severity != entry.after_severity:
        return f"Severity increased from {entry.before_severity.value} to {entry.after_severity.value}."
    return f"Complexity increased from {entry.before_complexity.value} to {entry.after_complexity.value}."


def build_facts(entries: Sequence[ResultEntry]) -> str:
    """Render the factual skeleton, grouped IMPROVED, WORSENED, UNCHANGED.

    Entries keep their result-list order inside a group; empty groups are
    omitted. This text is the only factual content an explanation may carry.
    """
    lines = [TITLE, ""]
    if not entries:
        lines.append(_EMPTY_NOTE)
        return "\n".join(lines) + "\n"

    for change_type, heading in _GROUPS:
        group = [e for e in entries if e.change_type is change_type]
        if not group:
            continue
        lines.append(f"### {heading} ({len(group)})")
        for entry in group:
            lines.append(f"- **{entry.issue_code.value}**: {describe_entry(entry)}")
        lines.append("")

    return "\n".join(lines).rstrip("\n") + "\n"


def _code_counts(text: str) -> Counter:
    return Counter(match.group(1) for match in _ISSUE_CODE_RE.finditer(text))


def _transition(entry: ResultEntry) -> Optional[str]:
    """The "from X to Y" values a changed, still-present issue must keep."""
    if entry.change_type is ChangeType.UNCHANGED:
        return None
    if entry.before_severity is None or entry.after_severity is None:
        return None
    if entry.before_severity != entry.after_severity:
        return f"from {entry.before_severity.value} to {entry.after_severity.value}"
    return f"from {entry.before_complexity.value} to {entry.after_complexity.value}"


def _split_sections(text: str) -> tuple[str, list[tuple[str, int, str]]]:
    """Split text at group headings into (preamble, [(heading, count, body)])."""
    matches = list(_HEADING_RE.finditer(text))
    preamble = text[:matches[0].start()] if matches else text
    sections = []
    for i, match in enumerate(matches):
        end = matches[i + 1].start() if i + 1 < len(matches) else len(text)
        sections.append((match.group(1), int(match.group(2)), text[match.end():end]))
    return preamble, sections


def verify_polished(polished: str, facts: str, entries: Sequence[ResultEntry]) -> Optional[str]:
    """Check that rephrased prose kept every fact.

    The prose must keep each group heading with its count, name under each
    heading exactly the issue codes of that group (as a multiset), and keep
    the "from X to Y" values of every changed issue in its group. Issue
    codes may not appear before the first heading.

    Returns:
        None if the prose is acceptable, otherwise the reason it was rejected
    """
    if not polished.strip():
        return "empty response"
    if _code_counts(polished) != _code_counts(facts):
        return "issue codes differ from the facts"

    preamble, sections = _split_sections(polished)
    if _code_counts(preamble):
        return "issue code outside a group"

    found: dict[str, tuple[int, str]] = {}
    for heading, count, body in sections:
        if heading in found:
            return f"duplicate group heading '{heading}'"
        found[heading] = (count, body)

    for change_type, heading in _GROUPS:
        group = [e for e in entries if e.change_type is change_type]
        if not group:
            if heading in found:
                return f"unexpected group heading '{heading}'"
            continue
        if heading not in found:
            return f"missing group heading '{heading} ({len(group)})'"
        count, body = found[heading]
        if count != len(group):
            return f"group '{heading}' has count {count}, expected {len(group)}"
        if _code_counts(body) != Counter(e.issue_code.value for e in group):
            return f"issue codes under '{heading}' differ from the facts"
        for entry in group:
            transition = _transition(entry)
            if transition is not None and not re.search(re.escape(transition) + r"\b", body, re.IGNORECASE):
                return f"{entry.issue_code.value} lost '{transition}' under '{heading}'"
    return None


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ExplanationSynthesizer:
    """Produces the cached natural-language summary of a Comparison.

    Facts are computed locally. An optional polisher may rephrase them,
    bounded by a timeout; any failure falls back to the facts verbatim.
    At most one Explanation is stored per comparison.
    """

    def __init__(
        self,
        *,
        store: ExplanationStorePort,
        logger: LoggerPort,
        polisher: ProsePolisherPort | None = None,
        timeout_seconds: float = 20.0,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._store = store
        self._logger = logger
        self._polisher = polisher
        self._timeout_seconds = timeout_seconds
        self._clock = clock

    def explain(self, comparison: Comparison, *, polish: bool = True) -> tuple[Explanation, bool]:
        """Return the comparison's Explanation, generating it on first request.

        Args:
            comparison: Stored comparison to explain
            polish: Allow the polisher for a first-time generation

        Returns:
            (explanation, created)
        """
        cached = self._store.load(comparison.comparison_id)
        if cached is not None:
            self._logger.info(
                "explanation_reused",
                type="explanation_reused",
                comparison_id=comparison.comparison_id,
            )
            return cached, False

        facts = build_facts(comparison.results)
        content = facts
        polished = False
        if polish and self._polisher is not None:
            text = self._polish(comparison, facts)
            if text is not None:
                content = text
                polished = True

        candidate = Explanation(
            comparison_id=comparison.comparison_id,
            content=content,
            facts=facts,
            polished=polished,
            created_at=self._clock(),
        )
        stored, created = self._store.create_or_get(candidate)
        self._logger.info(
            "explanation_created" if created else "explanation_reused",
            type="explanation_created" if created else "explanation_reused",
            comparison_id=comparison.comparison_id,
            polished=stored.polished,
        )
        return stored, created

    def _polish(self, comparison: Comparison, facts: str) -> Optional[str]:
        assert self._polisher is not None
        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="polish")
        future = executor.submit(self._polisher.polish, facts)
        try:
            text = future.result(timeout=self._timeout_seconds)
        except FutureTimeoutError:
            future.cancel()
            self._logger.warning(
                "polish_timeout",
                type="polish_timeout",
                comparison_id=comparison.comparison_id,
                timeout_seconds=self._timeout_seconds,
            )
            return None
        except Exception:
            self._logger.exception(
                "polish_failed",
                type="polish_failed",
                comparison_id=comparison.comparison_id,
            )
            return None
        finally:
            executor.shutdown(wait=False)

        reason = verify_polished(text, facts, comparison.results)
        if reason is not None:
            self._logger.warning(
                "polish_rejected",
                type="polish_rejected",
                comparison_id=comparison.comparison_id,
                reason=reason,
            )
            return None
        return text
