"""Translation lookup over per-language YAML dictionaries."""

import logging
import re
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from .config import SUPPORTED_LANGUAGES
from .errors import InvalidInputError


logger = logging.getLogger(__name__)

DEFAULT_LOCALES_DIR = Path(__file__).parent / "locales"
FALLBACK_LANGUAGE = "en"

_PLACEHOLDER = re.compile(r"\{(\w+)\}")


def _lookup(tree: Mapping[str, Any], key: str) -> Optional[str]:
    node: Any = tree
    for part in key.split("."):
        if not isinstance(node, Mapping) or part not in node:
            return None
        node = node[part]
    return node if isinstance(node, str) else None


class Translator:
    """
    Resolve dotted keys (``nav.dashboard``) for a language.

    Lookup order: requested language, then English, then the key itself.
    """

    def __init__(self, locales_dir: Optional[Union[str, Path]] = None):
        self.locales_dir = Path(locales_dir) if locales_dir else DEFAULT_LOCALES_DIR
        self._dictionaries: Dict[str, Dict[str, Any]] = {}
        for language in SUPPORTED_LANGUAGES:
            self._dictionaries[language] = self._load(language)

    def _load(self, language: str) -> Dict[str, Any]:
        path = self.locales_dir / f"{language}.yaml"
        if not path.exists():
            logger.warning(f"No dictionary for language '{language}' at {path}")
            return {}
        with open(path, "r", encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise InvalidInputError(f"Invalid translation file {path}: {e}") from e
        if not isinstance(data, dict):
            raise InvalidInputError(f"Translation file {path} must contain a mapping")
        return data

    def translate(
        self,
        key: str,
        language: str = FALLBACK_LANGUAGE,
        params: Optional[Mapping[str, Any]] = None,
    ) -> str:
        if language not in self._dictionaries:
            raise InvalidInputError(f"Unsupported language: {language}")

        text = _lookup(self._dictionaries[language], key)
        if text is None and language != FALLBACK_LANGUAGE:
            text = _lookup(self._dictionaries[FALLBACK_LANGUAGE], key)
        if text is None:
            return key

        if params:
            # Unknown placeholders stay as written
            text = _PLACEHOLDER.sub(
                lambda m: str(params[m.group(1)]) if m.group(1) in params else m.group(0), text
            )
        return text
