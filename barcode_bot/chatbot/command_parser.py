"""
Turn free-text slash command arguments into typed options.

Slack hands over everything after the command name as one string, so options
are written inline:

    /barcode item_name:Coca Cola product_code:1234567890123 price:100

Values run until the next known option name and may contain spaces. When no
option names are present, arguments are read positionally as
``<item name ...> <product code> <price>``.
"""

from __future__ import annotations

import re
from typing import Any, Dict

from barcode_bot.chatbot.commands import CommandDefinition
from barcode_bot.chatbot.validation import parse_int, raise_if_errors, require_str


def _option_pattern(definition: CommandDefinition) -> re.Pattern:
    names = "|".join(re.escape(n) for n in sorted(definition.option_names, key=len, reverse=True))
    return re.compile(rf"(?:^|(?<=\s))({names})\s*[:=]", re.IGNORECASE)


def split_options(definition: CommandDefinition, text: str) -> Dict[str, str]:
    """Split raw command text into option name -> raw string value."""
    text = (text or "").strip()
    if not text or not definition.options:
        return {}

    matches = list(_option_pattern(definition).finditer(text))
    if not matches:
        return _positional(definition, text)

    raw: Dict[str, str] = {}
    for i, match in enumerate(matches):
        end = matches[i + 1].start() if i + 1 < len(matches) else len(text)
        name = match.group(1).lower()
        # First occurrence wins, same as the form validators.
        raw.setdefault(name, text[match.end() : end].strip())
    return raw


def _positional(definition: CommandDefinition, text: str) -> Dict[str, str]:
    tokens = text.split()
    names = definition.option_names
    if len(tokens) < len(names):
        return dict(zip(names, tokens))
    # The first option soaks up any extra words (item names contain spaces).
    tail = len(names) - 1
    head = tokens[: len(tokens) - tail]
    rest = tokens[len(tokens) - tail :]
    return dict(zip(names, [" ".join(head)] + rest))


def parse_options(definition: CommandDefinition, text: str) -> Dict[str, Any]:
    """
    Parse and type-check the options of one command invocation.

    Raises:
        ValidationError: listing every missing or malformed option.
    """
    return validate_options(definition, split_options(definition, text))


def validate_options(definition: CommandDefinition, raw: Dict[str, Any]) -> Dict[str, Any]:
    """Type-check option values that are already split out, from text or a structured payload."""
    errors: Dict[str, str] = {}
    options: Dict[str, Any] = {}
    for opt in definition.options:
        label = opt.name
        if opt.type == "integer":
            value = parse_int(
                raw,
                opt.name,
                errors,
                min_value=opt.min_value,
                max_value=opt.max_value,
                required=opt.required,
                label=label,
            )
            if opt.name in raw and opt.name not in errors:
                options[opt.name] = value
        elif opt.required:
            options[opt.name] = require_str(raw, opt.name, errors, label=label)
        elif raw.get(opt.name):
            options[opt.name] = str(raw[opt.name]).strip()
    raise_if_errors(errors)
    return options
