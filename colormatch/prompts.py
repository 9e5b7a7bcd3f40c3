from __future__ import annotations

from collections.abc import Iterable
from importlib.resources import files
from importlib.resources.abc import Traversable

from colormatch.api.models import RoundOutcome


class PromptLoadError(RuntimeError):
    pass


# Sound effects from the public ASK sound library.
WAITING_AUDIO = '<audio src="https://s3.amazonaws.com/ask-soundlibrary/foley/amzn_sfx_rhythmic_ticking_30s_01.mp3"/>'
WINNING_AUDIO = '<audio src="https://s3.amazonaws.com/ask-soundlibrary/musical/amzn_sfx_bell_timer_01.mp3"/>'
LOSING_AUDIO = '<audio src="https://s3.amazonaws.com/ask-soundlibrary/musical/amzn_sfx_buzzer_small_01.mp3"/>'

_OUTCOME_PROMPTS: dict[RoundOutcome, str] = {
    RoundOutcome.win: "round_won.txt",
    RoundOutcome.lose: "round_lost.txt",
    RoundOutcome.timeout: "round_timed_out.txt",
}


def templates_dir() -> Traversable:
    # Shipped as package data, so it resolves the same from a checkout or an install.
    return files("colormatch") / "prompt_templates"


def load_prompt(name: str) -> str:
    """Load a prompt template bundled in `colormatch/prompt_templates/`.

    Example:
        load_prompt("help.txt")
    """

    path = templates_dir() / name
    try:
        return path.read_text(encoding="utf-8").strip()
    except FileNotFoundError as e:
        raise PromptLoadError(f"Prompt not found: {path}") from e


def round_started_speech(color: str) -> str:
    return load_prompt("round_started.txt").format(color=color, waiting_audio=WAITING_AUDIO)


def outcome_speech(outcome: RoundOutcome) -> str:
    return load_prompt(_OUTCOME_PROMPTS[outcome]).format(winning_audio=WINNING_AUDIO, losing_audio=LOSING_AUDIO)


def play_again_reprompt() -> str:
    return load_prompt("play_again_reprompt.txt")


def _spoken_list(items: list[str]) -> str:
    if len(items) <= 1:
        return "".join(items)
    return ", ".join(items[:-1]) + f", or {items[-1]}"


def help_speech(colors: Iterable[str]) -> str:
    return load_prompt("help.txt").format(colors=_spoken_list(list(colors)))


def error_speech() -> str:
    return load_prompt("error.txt")
