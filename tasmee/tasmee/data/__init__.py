"""
Reference text loading.

The reference is read once and shared: a UTF-8 text file with one verse per
line, or a JSON file holding either a list of lines or
{"title": ..., "lines": [...]}. Without a configured path the bundled
Al-Fatiha text is used.
"""

import json
from functools import lru_cache
from importlib import resources
from pathlib import Path

from tasmee.config import TasmeeSettings, get_settings
from tasmee.exceptions import ReferenceDataError
from tasmee.models import ReferenceText

AL_FATIHA_TITLE = "الفاتحة"


def _parse_lines(text: str) -> list[str]:
    return [line.strip() for line in text.splitlines() if line.strip()]


def load_al_fatiha() -> ReferenceText:
    """The bundled text of Surah Al-Fatiha (7 ayahs)."""
    text = resources.files(__name__).joinpath("al_fatiha.txt").read_text(encoding="utf-8")
    return ReferenceText(lines=_parse_lines(text), title=AL_FATIHA_TITLE)


def load_reference_text(path: str | Path) -> ReferenceText:
    """
    Load a reference text from disk.

    Args:
        path: .txt (one line per verse) or .json file

    Returns:
        ReferenceText

    Raises:
        ReferenceDataError: If the file is missing, malformed or empty
    """
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ReferenceDataError(f"Cannot read reference text {path}: {e}") from e

    title = None
    if path.suffix.lower() == ".json":
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise ReferenceDataError(f"Invalid JSON in {path}: {e}") from e

        if isinstance(data, dict):
            title = data.get("title")
            data = data.get("lines")
        if not isinstance(data, list) or not all(isinstance(line, str) for line in data):
            raise ReferenceDataError(f"{path} must hold a list of lines")
        lines = [line.strip() for line in data if line.strip()]
    else:
        lines = _parse_lines(content)

    if not lines:
        raise ReferenceDataError(f"Reference text {path} is empty")

    return ReferenceText(lines=lines, title=title or path.stem)


@lru_cache(maxsize=8)
def _cached_reference(path: str | None) -> ReferenceText:
    if path is None:
        return load_al_fatiha()
    return load_reference_text(path)


def get_reference_text(settings: TasmeeSettings | None = None) -> ReferenceText:
    """
    The configured reference text, loaded once per process.

    Uses settings.reference_path (TASMEE_REFERENCE_PATH) when set, otherwise
    the bundled Al-Fatiha text.
    """
    settings = settings or get_settings()
    path = str(settings.reference_path) if settings.reference_path else None
    return _cached_reference(path)


__all__ = [
    "AL_FATIHA_TITLE",
    "get_reference_text",
    "load_al_fatiha",
    "load_reference_text",
]
