"""
Prompt templates.

Prompts are plain str.format templates. Literal JSON braces are written
doubled ({{ }}) so only real placeholders count as variables.
"""

from string import Formatter
from typing import Any, Optional

from learning.exceptions import PromptTemplateError


class PromptTemplate:
    """A named prompt whose placeholders must all be filled before use."""

    def __init__(
        self,
        template: str,
        name: str = "unnamed",
        defaults: Optional[dict[str, Any]] = None,
    ):
        self.template = template.strip()
        self.name = name
        self.defaults = defaults or {}
        self.required_vars = {
            field for _, field, _, _ in Formatter().parse(self.template) if field
        }

    def render(self, **values: Any) -> str:
        """Fill the template; missing placeholders raise PromptTemplateError."""
        values = {**self.defaults, **values}
        missing = self.required_vars - values.keys()
        if missing:
            raise PromptTemplateError(template_name=self.name, missing_vars=sorted(missing))
        return self.template.format(**values)


def format_learning_path(titles: list[str], separator: str = " → ") -> str:
    return separator.join(titles)


def optional_section(heading: str, body: str) -> str:
    """Render "heading:\\nbody\\n" or nothing when body is empty."""
    if not body:
        return ""
    return f"{heading}:\n{body}\n"
