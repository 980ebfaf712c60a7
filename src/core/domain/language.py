"""Language utilities for the storefront client.

This module centralizes the language options used for user-facing
fallback messages. Keeping it in the domain layer lets the error
normalizer, the HTTP client and the CLI share a single source of truth
without circular imports.
"""

from __future__ import annotations

from enum import Enum


class Language(str, Enum):
    """Supported natural-language choices for user-facing output."""

    ENGLISH = "en"
    JAPANESE = "ja"

    def label(self) -> str:
        """Human readable label for prompts and logging."""

        return "Japanese" if self is Language.JAPANESE else "English"


# Fallback texts used when neither the server nor the caller supplied one.
_MESSAGES: dict[str, dict[Language, str]] = {
    "network_failed": {
        Language.ENGLISH: "Could not reach the server.",
        Language.JAPANESE: "通信に失敗しました",
    },
    "network_error": {
        Language.ENGLISH: "A network error occurred.",
        Language.JAPANESE: "ネットワークエラーが発生しました。",
    },
    "server_error": {
        Language.ENGLISH: "A server error occurred.",
        Language.JAPANESE: "サーバーエラーが発生しました。",
    },
    "generic": {
        Language.ENGLISH: "An unexpected error occurred.",
        Language.JAPANESE: "エラーが発生しました。",
    },
}


def message_for(key: str, language: Language = Language.ENGLISH) -> str:
    """Return the localized fallback message stored under `key`."""

    texts = _MESSAGES[key]
    return texts.get(language) or texts[Language.ENGLISH]
