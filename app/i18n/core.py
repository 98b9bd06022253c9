"""Locale dictionaries (app/i18n/<lang>.json) and the t() lookup used by the views."""
from __future__ import annotations

import json
from pathlib import Path

import streamlit as st

DEFAULT_LANG = "EN"

_LOCALE_DIR = Path(__file__).resolve().parent
_LOADED: dict[str, dict[str, str]] = {}


def load_lang(lang: str) -> dict[str, str]:
    strings = _LOADED.get(lang)
    if strings is None:
        path = _LOCALE_DIR / f"{lang.lower()}.json"
        strings = json.loads(path.read_text(encoding="utf-8")) if path.exists() else {}
        _LOADED[lang] = strings
    return strings


def t(key: str, **kwargs) -> str:
    """
    Message for key in the session language; the key itself when untranslated.

    Engine messages arrive with placeholders ({tag}, {route}, ...); a
    placeholder the dictionary text does not know leaves the text unformatted.
    """
    raw = load_lang(st.session_state.get("lang", DEFAULT_LANG)).get(key, key)
    if not kwargs:
        return raw
    try:
        return raw.format(**kwargs)
    except (KeyError, IndexError, ValueError):
        return raw
