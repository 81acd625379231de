from toolgate.core.safety.classifier import CommandClassifier, classify_command
from toolgate.core.safety.errors import (
    CommandSafetyError,
    EmptyCommandError,
    ForbiddenCommandError,
)
from toolgate.core.safety.path_analysis import PathRisk, analyze_path_risk, assess_path
from toolgate.core.safety.tiers import ClassificationVerdict, SafetyTier, escalate
from toolgate.core.safety.validator import SafetyValidator, validate_command_safety

__all__ = [
    "ClassificationVerdict",
    "CommandClassifier",
    "CommandSafetyError",
    "EmptyCommandError",
    "ForbiddenCommandError",
    "PathRisk",
    "SafetyTier",
    "SafetyValidator",
    "analyze_path_risk",
    "assess_path",
    "classify_command",
    "escalate",
    "validate_command_safety",
]
