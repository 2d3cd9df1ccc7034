"""Builds an ordered rule set from serialized rule dicts."""

from collections.abc import Mapping, Sequence

import structlog

from siterate.services.errors import RuleValidationError
from siterate.services.schemas.rules import PricingRule, PricingRuleDraft
from siterate.services.validator import RuleValidator

logger = structlog.get_logger(__name__)


def load_rule_set(
    raw_rules: Sequence[Mapping[str, object]],
    validator: RuleValidator | None = None,
) -> tuple[list[PricingRule], list[tuple[int, RuleValidationError]]]:
    """Decode and validate rules in list order.

    ``sequence`` defaults to the list position and ``id`` to ``rule-<position>``
    when the snapshot does not carry them. Raises RuleDecodeError on malformed dicts.
    """
    validator = validator or RuleValidator()
    rules: list[PricingRule] = []
    errors: list[tuple[int, RuleValidationError]] = []
    for i, raw in enumerate(raw_rules):
        draft: PricingRuleDraft = PricingRuleDraft.from_dict(raw)
        sequence: object = raw.get("sequence")
        rule_id: object = raw.get("id")
        result: PricingRule | RuleValidationError = validator.validate(
            draft,
            sequence=sequence if isinstance(sequence, int) and not isinstance(sequence, bool) else i,
            rule_id=rule_id if isinstance(rule_id, str) and rule_id else f"rule-{i}",
        )
        if isinstance(result, RuleValidationError):
            errors.append((i, result))
        else:
            rules.append(result)
    if errors:
        logger.warning("Rule set has invalid rules", invalid=len(errors), valid=len(rules))
    return rules, errors
