"""
Conversation and rating adapters: reshape caller turns into Gemini `contents`
and reshape Gemini text back into results. Pure functions, no I/O.
"""
from typing import Iterable, Mapping

from errors import InvalidInput
from prompts import Prompts
from providers import Turn

ROLES = ("user", "model")


def render_context(context: Mapping[str, str] | None) -> str:
    """Render a context set as 'key: value' pairs joined by ', ', in caller order."""
    if not context:
        return ""
    return ", ".join(f"{k}: {v}" for k, v in context.items())


def _is_dropped(turn: Turn, prompts: Prompts) -> bool:
    if turn.role != "model":
        return False
    return turn.text == prompts.greeting or turn.text.strip() == prompts.system_instructions.strip()


def build_contents(
    turns: Iterable[Turn] | None,
    context: Mapping[str, str] | None = None,
    prompts: Prompts | None = None,
) -> list[dict]:
    """
    Map turns to Gemini messages. The earliest user turn is prefixed with the system
    instructions and, when given, the current context; every user turn gets the
    customer label. The widget greeting is dropped from model turns.
    """
    prompts = prompts or Prompts()
    turns = list(turns or [])
    if not turns:
        raise InvalidInput("Falta el historial de la conversación.")

    context_block = render_context(context)
    contents = []
    seen_user = False
    for turn in turns:
        if turn.role not in ROLES:
            raise InvalidInput(f"Rol de mensaje no reconocido: '{turn.role}'.")
        if _is_dropped(turn, prompts):
            continue
        text = turn.text
        if turn.role == "user":
            text = prompts.customer_label + text
            if not seen_user:
                seen_user = True
                prefix = prompts.system_instructions + "\n\n"
                if context_block:
                    prefix += f"[Contexto actual: {context_block}]\n\n"
                text = prefix + text
        contents.append({"role": turn.role, "parts": [{"text": text}]})
    return contents


def build_rating_prompt(components: Mapping[str, str], prompts: Prompts | None = None) -> str:
    prompts = prompts or Prompts()
    if not components:
        raise InvalidInput("Faltan los componentes para calcular el rendimiento.")
    return prompts.rating_template.format(
        components=render_context(components),
        labels=", ".join(prompts.rating_labels),
    )


def build_rating_contents(components: Mapping[str, str], prompts: Prompts | None = None) -> list[dict]:
    """Single historyless user message asking for a one-word rating."""
    return [{"role": "user", "parts": [{"text": build_rating_prompt(components, prompts)}]}]


def parse_rating(text: str | None, prompts: Prompts | None = None) -> str:
    """
    Reduce model prose to one of the rating labels: keep letters and whitespace,
    take the last word. Anything else yields the fallback string.
    """
    prompts = prompts or Prompts()
    cleaned = "".join(ch for ch in (text or "") if ch.isalpha() or ch.isspace())
    words = cleaned.split()
    if not words:
        return prompts.rating_fallback
    label = words[-1].upper()
    if label in prompts.rating_labels:
        return label
    return prompts.rating_fallback
