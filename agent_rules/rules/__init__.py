from agent_rules.rules.concatenate import concatenate_rules
from agent_rules.rules.models import RuleFragment
from agent_rules.rules.repository import load_rule_fragments

__all__ = ["RuleFragment", "concatenate_rules", "load_rule_fragments"]
