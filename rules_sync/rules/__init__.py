from rules_sync.rules.aggregator import DocumentAggregator
from rules_sync.rules.compilers import CompiledRule, CopilotRuleCompiler, IRuleCompiler
from rules_sync.rules.fences import balance_fences
from rules_sync.rules.models import RuleDocument
from rules_sync.rules.parser import parse_rule, parse_rule_text
from rules_sync.rules.repository import RulesRepository
from rules_sync.rules.scope import resolve_scope, translate_scope

__all__ = [
    "CompiledRule",
    "CopilotRuleCompiler",
    "DocumentAggregator",
    "IRuleCompiler",
    "RuleDocument",
    "RulesRepository",
    "balance_fences",
    "parse_rule",
    "parse_rule_text",
    "resolve_scope",
    "translate_scope",
]
