"""Interactive prompts (questionary). Every helper returns None when the user cancels."""

import questionary


def _required(message: str):
    def validate(value: str) -> bool | str:
        return bool(value) or message

    return validate


def ask_secret(message: str, required_message: str) -> str | None:
    """Hidden input that re-prompts until something is entered. The answer is returned as typed."""
    return questionary.password(message, validate=_required(required_message)).ask()


def ask_choice(message: str, choices: list[tuple[str, str]]) -> str | None:
    """Single-choice list of (display name, value) pairs; returns the chosen value."""
    return questionary.select(
        message,
        choices=[questionary.Choice(title=name, value=value) for name, value in choices],
    ).ask()
