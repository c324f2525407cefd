"""System prompts for the health assistant.

Prompt text lives in .txt files beside this module. A file with the same
name in $EDIBILIZE_PROMPTS_DIR, or in ./prompts of the working directory,
replaces the packaged one.
"""

import os
from functools import lru_cache
from pathlib import Path

PACKAGE_DIR = Path(__file__).parent
ASSISTANT_PROMPT = "health_assistant"


def prompt_dirs() -> list[Path]:
    """Directories searched for prompt files, highest priority first."""
    dirs = [Path.cwd() / "prompts", PACKAGE_DIR]
    override = os.getenv("EDIBILIZE_PROMPTS_DIR")
    if override:
        dirs.insert(0, Path(override))
    return dirs


@lru_cache(maxsize=8)
def load_prompt(name: str) -> str:
    """Return the text of the named prompt without surrounding whitespace.

    Raises:
        FileNotFoundError: If no search directory has {name}.txt
    """
    candidates = [directory / f"{name}.txt" for directory in prompt_dirs()]
    for path in candidates:
        if path.is_file():
            return path.read_text(encoding="utf-8").strip()

    searched = "\n".join(f"  - {path}" for path in candidates)
    raise FileNotFoundError(f"Prompt '{name}' not found. Searched:\n{searched}")


def get_assistant_prompt() -> str:
    return load_prompt(ASSISTANT_PROMPT)


def clear_cache() -> None:
    """Forget loaded prompts so edited files are read again."""
    load_prompt.cache_clear()


__all__ = [
    "ASSISTANT_PROMPT",
    "clear_cache",
    "get_assistant_prompt",
    "load_prompt",
    "prompt_dirs",
]
