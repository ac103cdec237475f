"""MVT content validation engine."""

from gateway.validator.ai import AiValidator
from gateway.validator.engine import ContentValidator, RuleBasedValidator
from gateway.validator.gate import FailFastGate, decide
from gateway.validator.models import (
    Dimension,
    Finding,
    ReportStatus,
    Severity,
    ValidationContext,
    ValidationReport,
)

__all__ = [
    "AiValidator",
    "ContentValidator",
    "Dimension",
    "FailFastGate",
    "Finding",
    "ReportStatus",
    "RuleBasedValidator",
    "Severity",
    "ValidationContext",
    "ValidationReport",
    "decide",
]
