"""Template evaluation over an event — failures become results, not raises."""

from __future__ import annotations

from datetime import datetime, timezone

import structlog
from jinja2 import StrictUndefined, TemplateError
from jinja2.sandbox import SandboxedEnvironment
from pydantic import BaseModel

from src.sensu.types import Event

logger = structlog.stdlib.get_logger()


def _unix_time(value: int | float) -> str:
    """Format epoch seconds as an ISO-8601 UTC timestamp."""
    return datetime.fromtimestamp(value, tz=timezone.utc).isoformat()


# Templates can arrive through entity annotations, so they run sandboxed.
_env = SandboxedEnvironment(undefined=StrictUndefined, autoescape=False)
_env.filters["unix_time"] = _unix_time


class TemplateResult(BaseModel):
    """Outcome of rendering one template: a value or an error message."""

    value: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap_or(self, default: str) -> str:
        """Return the rendered value, or *default* when rendering failed."""
        if self.value is None:
            return default
        return self.value


def render_template(name: str, source: str, event: Event) -> TemplateResult:
    """Render *source* with ``event``, ``entity`` and ``check`` in scope."""
    try:
        template = _env.from_string(source)
        value = template.render(event=event, entity=event.entity, check=event.check)
    except (TemplateError, TypeError, ValueError, ArithmeticError, LookupError) as exc:
        logger.warning("template_render_failed", template=name, error=str(exc))
        return TemplateResult(error=f"{name}: {exc}")
    return TemplateResult(value=value)
