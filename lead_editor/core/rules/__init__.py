"""
Validation rule engine and configuration management.
"""

from .defaults import default_rules
from .rule_config import RuleConfigBuilder, RuleConfigLoader
from .rule_engine import RuleEngine

__all__ = [
    "RuleEngine",
    "RuleConfigLoader",
    "RuleConfigBuilder",
    "default_rules",
]
