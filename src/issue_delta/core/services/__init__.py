from __future__ import annotations

from .json_extractor import JsonExtractor
from .issue_validator import IssueValidator, IssuePayload, ValidatedReport, RejectedIssue
from .issue_matcher import IssueMatcher
from .change_classifier import ChangeClassifier, classify_pair
from .result_aggregator import ResultAggregator
from .explanation_synthesizer import ExplanationSynthesizer, build_facts, describe_entry, verify_polished

__all__ = [
    "JsonExtractor",
    "IssueValidator",
    "IssuePayload",
    "ValidatedReport",
    "RejectedIssue",
    "IssueMatcher",
    "ChangeClassifier",
    "classify_pair",
    "ResultAggregator",
    "ExplanationSynthesizer",
    "build_facts",
    "describe_entry",
    "verify_polished",
]
