"""Questionary / prompt_toolkit theme for runops.

Questionary uses prompt_toolkit under the hood. This module defines a single
central style so every selection prompt looks the same.
"""

from __future__ import annotations

from prompt_toolkit.styles import Style

QUESTIONARY_STYLE_SELECT = Style.from_dict(
    {
        "question": "bold ansibrightcyan",
        "answer": "bold ansibrightgreen",
        "pointer": "bold ansibrightgreen",
        "highlighted": "bold ansibrightgreen",
        "selected": "bold ansibrightgreen",
        "separator": "ansibrightblack",
        "instruction": "ansibrightblack",
        "search_success": "ansibrightgreen",
        "search_none": "ansired",
        "error": "bold ansired",
        "disabled": "ansibrightblack",
    }
)
