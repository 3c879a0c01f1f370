"""
Parsing and execution of `act` instructions.

An instruction is a short imperative sentence. Supported forms:

    click <selector>
    type <text> into <selector>
    fill <selector> with <text>
    press <KEY>
    scroll [up|down|top|bottom] [pixels]

Selectors default to CSS and accept the prefixes understood by
`actions.elements.parse_selector` (css=, xpath=, id=, name=, text=, partial_text=).
Text may be wrapped in single or double quotes. `%name%` placeholders are
replaced from the variables mapping before parsing, so secrets never need to
appear in the instruction itself.
"""

import re
from dataclasses import dataclass
from typing import Mapping, Optional

from .elements import click_element, fill_text
from .keyboard import send_keys, scroll


VARIABLE_PAT = re.compile(r"%([A-Za-z_][A-Za-z0-9_]*)%")

_CLICK = re.compile(r"^click\s+(?:on\s+)?(?P<selector>.+)$", re.I | re.S)
_TYPE = re.compile(r"^type\s+(?P<q>['\"]?)(?P<text>.*?)(?P=q)\s+into\s+(?P<selector>.+)$", re.I | re.S)
_FILL = re.compile(r"^fill\s+(?P<selector>.+?)\s+with\s+(?P<q>['\"]?)(?P<text>.*?)(?P=q)$", re.I | re.S)
_PRESS = re.compile(r"^press\s+(?P<key>[A-Za-z_ ]+)$", re.I)
_SCROLL = re.compile(
    r"^scroll(?:\s+(?P<direction>up|down|top|bottom))?(?:\s+(?:by\s+)?(?P<amount>\d+)\s*(?:px|pixels)?)?$",
    re.I,
)


@dataclass(frozen=True)
class ActionCommand:
    verb: str
    selector: Optional[str] = None
    text: Optional[str] = None
    key: Optional[str] = None
    direction: Optional[str] = None
    amount: int = 300

    def describe(self) -> str:
        if self.verb == "click":
            return f"clicked {self.selector}"
        if self.verb == "type":
            return f"typed into {self.selector}"
        if self.verb == "press":
            return f"pressed {self.key}"
        if self.direction in ("top", "bottom"):
            return f"scrolled to {self.direction}"
        return f"scrolled {self.direction} {self.amount}px"


def substitute_variables(action: str, variables: Optional[Mapping[str, str]] = None) -> str:
    variables = variables or {}

    def _replace(match):
        name = match.group(1)
        if name not in variables:
            raise ValueError(f"Missing value for variable %{name}%")
        return str(variables[name])

    return VARIABLE_PAT.sub(_replace, action)


def parse_action(action: str, variables: Optional[Mapping[str, str]] = None) -> ActionCommand:
    """Turn an instruction into an ActionCommand, raising ValueError if unsupported."""
    text = substitute_variables((action or "").strip(), variables)
    if not text:
        raise ValueError("Empty action")

    m = _CLICK.match(text)
    if m:
        return ActionCommand(verb="click", selector=m.group("selector").strip())

    m = _TYPE.match(text)
    if m:
        return ActionCommand(verb="type", selector=m.group("selector").strip(), text=m.group("text"))

    m = _FILL.match(text)
    if m:
        return ActionCommand(verb="type", selector=m.group("selector").strip(), text=m.group("text"))

    m = _PRESS.match(text)
    if m:
        return ActionCommand(verb="press", key=m.group("key").strip().upper())

    m = _SCROLL.match(text)
    if m:
        direction = (m.group("direction") or "down").lower()
        amount = int(m.group("amount")) if m.group("amount") else 300
        return ActionCommand(verb="scroll", direction=direction, amount=amount)

    raise ValueError(
        f"Unsupported action: {action!r}. Use 'click <selector>', 'type <text> into <selector>', "
        "'fill <selector> with <text>', 'press <KEY>' or 'scroll <up|down|top|bottom> [pixels]'."
    )


def perform_action(driver, command: ActionCommand, timeout: float = 10.0) -> None:
    """Execute a parsed command against a Selenium driver (blocking)."""
    if command.verb == "click":
        click_element(driver, command.selector, timeout=timeout)
    elif command.verb == "type":
        fill_text(driver, command.selector, command.text or "", timeout=timeout)
    elif command.verb == "press":
        send_keys(driver, command.key)
    elif command.verb == "scroll":
        scroll(driver, command.direction, command.amount)
    else:
        raise ValueError(f"Unsupported command: {command.verb}")


__all__ = [
    "ActionCommand",
    "substitute_variables",
    "parse_action",
    "perform_action",
]
