import re
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List

from transkit.errors import MarkupParseError
from transkit.markup import parse


@dataclass
class QAIssue:
    type: str  # 'missing_tag', 'unknown_tag', 'missing_variable', 'unknown_variable', 'invalid', 'empty'
    severity: str  # 'error', 'warning'
    message: str
    details: Any = None


@dataclass
class QAResult:
    status: str  # 'ok', 'warning', 'error'
    issues: List[QAIssue] = field(default_factory=list)
    tag_stats: str = ""
    qa_details: Dict[str, Any] = field(default_factory=dict)


class QAChecker:
    """
    Compares the placeholders of a serialized key with those of a translation.

    Translators may reorder, drop or repeat tags, so a dropped placeholder is only a
    warning. Placeholders the source does not have cannot bind to anything and are errors,
    as is markup that does not parse.
    """

    def __init__(self):
        # Opening index tags <0>, <12 class="x">
        self.index_tag_pattern = re.compile(r"<(\d+)(?:\s[^>]*)?/?>")
        # {{name}} or {{name, format}}
        self.variable_pattern = re.compile(r"\{\{\s*([^,}]+?)\s*(?:,[^}]*)?\}\}")

    def check_unit(self, source_text: str, target_text: str) -> QAResult:
        source_text = source_text or ""
        target_text = target_text or ""

        qa_details: Dict[str, Any] = {}
        issues: List[QAIssue] = []

        source_tags = Counter(self.index_tag_pattern.findall(source_text))
        target_tags = Counter(self.index_tag_pattern.findall(target_text))
        source_vars = set(self.variable_pattern.findall(source_text))
        target_vars = set(self.variable_pattern.findall(target_text))

        tag_stats = f"TAG: {len(set(target_tags) & set(source_tags))}/{len(source_tags)}"

        if not target_text:
            if source_text:
                issues.append(QAIssue(type="empty", severity="warning", message="Empty translation"))
            return self._result(issues, tag_stats, qa_details)

        missing_tags = sorted(set(source_tags) - set(target_tags), key=int)
        unknown_tags = sorted(set(target_tags) - set(source_tags), key=int)
        missing_vars = sorted(source_vars - target_vars)
        unknown_vars = sorted(target_vars - source_vars)

        if missing_tags:
            qa_details["missing_tags"] = missing_tags
            issues.append(QAIssue(
                type="missing_tag",
                severity="warning",
                message=f"Dropped tags: {', '.join(f'<{t}>' for t in missing_tags)}",
                details=missing_tags,
            ))

        if unknown_tags:
            qa_details["unknown_tags"] = unknown_tags
            issues.append(QAIssue(
                type="unknown_tag",
                severity="error",
                message=f"Unknown tags: {', '.join(f'<{t}>' for t in unknown_tags)}",
                details=unknown_tags,
            ))

        if missing_vars:
            qa_details["missing_variables"] = missing_vars
            issues.append(QAIssue(
                type="missing_variable",
                severity="warning",
                message=f"Dropped variables: {', '.join(missing_vars)}",
                details=missing_vars,
            ))

        if unknown_vars:
            qa_details["unknown_variables"] = unknown_vars
            issues.append(QAIssue(
                type="unknown_variable",
                severity="error",
                message=f"Unknown variables: {', '.join(unknown_vars)}",
                details=unknown_vars,
            ))

        try:
            parse(f"<0>{target_text}</0>", strict=True)
        except MarkupParseError as e:
            qa_details["invalid"] = str(e)
            issues.append(QAIssue(type="invalid", severity="error", message=f"Invalid markup: {e}", details=str(e)))

        return self._result(issues, tag_stats, qa_details)

    @staticmethod
    def _result(issues: List[QAIssue], tag_stats: str, qa_details: Dict[str, Any]) -> QAResult:
        status = "ok"
        if any(i.severity == "error" for i in issues):
            status = "error"
        elif issues:
            status = "warning"
        return QAResult(status=status, issues=issues, tag_stats=tag_stats, qa_details=qa_details)


def check_translation(source: str, target: str) -> QAResult:
    return QAChecker().check_unit(source, target)
