"""
Rendering: field dispatch, layout, themes and the live preview.
"""

from form_engine.render.controls import (
    Control,
    ControlType,
    OptionControl,
    dispatch_control,
    render_controls,
)
from form_engine.render.layout import ResolvedLayout, resolve_layout
from form_engine.render.preview import RenderedForm, render_form, render_placeholder
from form_engine.render.theme import DARK_THEME, LIGHT_THEME, Theme

__all__ = [
    "Control",
    "ControlType",
    "OptionControl",
    "dispatch_control",
    "render_controls",
    "ResolvedLayout",
    "resolve_layout",
    "RenderedForm",
    "render_form",
    "render_placeholder",
    "Theme",
    "LIGHT_THEME",
    "DARK_THEME",
]
