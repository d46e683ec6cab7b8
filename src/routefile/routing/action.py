"""Action reference parsing.

The third column of a route line names what the route points at::

    PageController.showPage
    PageController.showPage(id:'home')
    admin.UserController.edit(section:'profile', mode:'full')

Everything up to the last dot is the controller identifier, the last
component is the method name. Static arguments are ``key:'value'`` pairs
and stay strings; converting them is the dispatcher's business.
"""

import re

from routefile.errors import ActionSyntaxError
from routefile.routing.route import ActionDescriptor

_REFERENCE = re.compile(r"(?P<target>[A-Za-z_$][\w$]*(?:\.[A-Za-z_$][\w$]*)*)\.(?P<method>[A-Za-z_$][\w$]*)")
_ARG = re.compile(r"\s*(?P<key>\w+)\s*:\s*'(?P<value>[^']*)'\s*")


def _parse_args(body: str, text: str) -> dict[str, str]:
    args: dict[str, str] = {}
    if not body.strip():
        return args

    pos = 0
    while True:
        m = _ARG.match(body, pos)
        if m is None:
            msg = f"Malformed static argument near {body[pos:]!r} in {text!r}"
            raise ActionSyntaxError(msg)
        key = m.group("key")
        if key in args:
            msg = f"Duplicate static argument {key!r} in {text!r}"
            raise ActionSyntaxError(msg)
        args[key] = m.group("value")
        pos = m.end()
        if pos == len(body):
            return args
        if body[pos] != ",":
            msg = f"Expected ',' between static arguments in {text!r}"
            raise ActionSyntaxError(msg)
        pos += 1


def parse_action(text: str) -> ActionDescriptor:
    """Parse an action reference into an ``ActionDescriptor``.

    Raises ``ActionSyntaxError`` for a missing method name, unbalanced
    parentheses, unquoted or duplicate arguments, or trailing text.
    """
    text = text.strip()
    m = _REFERENCE.match(text)
    if m is None:
        msg = f"Expected 'Controller.method', got {text!r}"
        raise ActionSyntaxError(msg)

    rest = text[m.end() :]
    static_args: dict[str, str] = {}
    if rest:
        if not (rest.startswith("(") and rest.endswith(")")):
            msg = f"Unexpected text {rest!r} after action reference in {text!r}"
            raise ActionSyntaxError(msg)
        static_args = _parse_args(rest[1:-1], text)

    return ActionDescriptor(
        target=m.group("target"),
        method_name=m.group("method"),
        static_arg_items=tuple(static_args.items()),
    )
