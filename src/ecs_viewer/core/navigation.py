"""Menu selection helpers.

Every menu choice carries a value of the form ``kind:value[:extra]``, for example
``task:abc123`` or ``container:logs:app``. Two values are reserved for moving around:
``navigation:back`` and ``navigation:exit``. A prompt cancelled with Ctrl-C returns None,
which is treated as exit.
"""

from __future__ import annotations

from typing import NamedTuple

import questionary
from rich.console import Console

console = Console()

NAV_BACK = "navigation:back"
NAV_EXIT = "navigation:exit"
PAGE_NEXT = "pagination:next"
PAGE_PREVIOUS = "pagination:previous"

PAGINATION_THRESHOLD = 30
PAGE_SIZE = 25
# questionary refuses use_shortcuts above this many choices
MAX_SHORTCUT_CHOICES = 36


class Selection(NamedTuple):
    kind: str
    value: str
    extra: str


def parse_selection(selected: str | None) -> Selection:
    """Split a choice value. Values without a colon parse as kind 'unknown'."""
    if not selected or ":" not in selected:
        return Selection("unknown", selected or "", "")

    kind, _, rest = selected.partition(":")
    value, _, extra = rest.partition(":")
    return Selection(kind, value, extra)


def handle_navigation(selected: str | None) -> tuple[bool, bool]:
    """Returns (should_continue, should_exit)."""
    if selected is None or selected == NAV_EXIT:
        console.print("\n👋 Goodbye!", style="cyan")
        return False, True
    if selected == NAV_BACK:
        return False, False
    return True, False


def get_questionary_style() -> questionary.Style:
    return questionary.Style(
        [
            ("qmark", "fg:cyan bold"),
            ("question", "bold"),
            ("answer", "fg:green bold"),
            ("pointer", "fg:cyan bold"),
            ("highlighted", "fg:cyan bold"),
            ("instruction", "fg:#888888 italic"),
        ]
    )


def with_navigation_choices(choices: list[dict[str, str]], back_text: str | None) -> list[questionary.Choice]:
    """Menu entries followed by back (b) and exit (q)."""
    menu = [questionary.Choice(choice["name"], choice["value"]) for choice in choices]
    if back_text:
        menu.append(questionary.Choice(f"⬅️ {back_text} (b)", NAV_BACK, shortcut_key="b"))
    menu.append(questionary.Choice("❌ Exit (q)", NAV_EXIT, shortcut_key="q"))
    return menu


def select_with_navigation(prompt: str, choices: list[dict[str, str]], back_text: str | None) -> str | None:
    menu = with_navigation_choices(choices, back_text)
    return questionary.select(
        prompt,
        choices=menu,
        style=get_questionary_style(),
        use_shortcuts=len(menu) <= MAX_SHORTCUT_CHOICES,
    ).ask()


def _page_menu(
    choices: list[dict[str, str]], page: int, page_count: int, page_size: int, back_text: str | None
) -> list[questionary.Choice]:
    start = page * page_size
    menu = [questionary.Choice(choice["name"], choice["value"]) for choice in choices[start : start + page_size]]
    if page < page_count - 1:
        menu.append(questionary.Choice("→ Next page", PAGE_NEXT))
    if page > 0:
        menu.append(questionary.Choice("← Previous page", PAGE_PREVIOUS))
    if back_text:
        menu.append(questionary.Choice(f"⬅️ {back_text}", NAV_BACK))
    menu.append(questionary.Choice("❌ Exit", NAV_EXIT))
    return menu


def select_with_pagination(
    prompt: str, choices: list[dict[str, str]], back_text: str | None, page_size: int = PAGE_SIZE
) -> str | None:
    """Page through long lists; returns the first selection that is not a page move."""
    page_count = max(1, -(-len(choices) // page_size))
    page = 0

    while True:
        selected = questionary.select(
            f"{prompt} (Page {page + 1} of {page_count})",
            choices=_page_menu(choices, page, page_count, page_size, back_text),
            style=get_questionary_style(),
            use_shortcuts=False,
        ).ask()

        if selected == PAGE_NEXT:
            page += 1
        elif selected == PAGE_PREVIOUS:
            page -= 1
        else:
            return selected


def select_with_auto_pagination(
    prompt: str, choices: list[dict[str, str]], back_text: str | None, threshold: int = PAGINATION_THRESHOLD
) -> str | None:
    if len(choices) > threshold:
        return select_with_pagination(prompt, choices, back_text)
    return select_with_navigation(prompt, choices, back_text)
