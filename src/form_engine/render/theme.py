"""
Visual variants for rendered forms.

The theme switcher is an external collaborator that only supplies a
boolean. That flag selects one of two fixed class sets, and the chosen
``Theme`` is passed explicitly to every renderer.
"""

from dataclasses import dataclass

ACCENT = "#EC5990"

_FIELD_BASE = (
    "w-full border rounded-lg p-2.5 focus:outline-none "
    f"focus:ring-2 focus:ring-[{ACCENT}] transition-colors duration-200"
)
_TOGGLE_BASE = f"h-4 w-4 border-gray-300 text-[{ACCENT}] focus:ring-[{ACCENT}]"


@dataclass(frozen=True)
class Theme:
    """CSS class set for one visual variant."""

    name: str
    is_dark_mode: bool
    field: str
    checkbox: str
    radio: str
    text: str
    label: str
    description: str
    error: str
    card: str
    title: str
    submit_button: str
    reset_button: str
    notice_success: str
    notice_failure: str

    @classmethod
    def from_flag(cls, is_dark_mode: bool) -> "Theme":
        return DARK_THEME if is_dark_mode else LIGHT_THEME


LIGHT_THEME = Theme(
    name="light",
    is_dark_mode=False,
    field=f"{_FIELD_BASE} bg-white border-gray-300 text-black placeholder-gray-500",
    checkbox=f"{_TOGGLE_BASE} rounded bg-white",
    radio=f"{_TOGGLE_BASE} rounded-full bg-white",
    text="text-black",
    label="block font-medium text-gray-900",
    description="text-sm text-gray-500 mb-1",
    error="text-sm text-red-500 mt-1",
    card="bg-white rounded-lg p-6 shadow-sm border border-gray-200",
    title="text-xl font-bold text-black",
    submit_button=f"flex-1 px-4 py-2 rounded-lg font-medium bg-[{ACCENT}] text-white hover:bg-[#ea4b85]",
    reset_button="px-4 py-2 rounded-lg font-medium bg-gray-200 text-gray-700 hover:bg-gray-300",
    notice_success="p-4 rounded-md bg-green-100 text-green-700",
    notice_failure="p-4 rounded-md bg-red-100 text-red-700",
)

DARK_THEME = Theme(
    name="dark",
    is_dark_mode=True,
    field=f"{_FIELD_BASE} bg-gray-800 border-gray-600 text-white placeholder-gray-400",
    checkbox=f"{_TOGGLE_BASE} rounded bg-gray-800 border-gray-600",
    radio=f"{_TOGGLE_BASE} rounded-full bg-gray-800 border-gray-600",
    text="text-white",
    label="block font-medium text-gray-200",
    description="text-sm text-gray-400 mb-1",
    error="text-sm text-red-500 mt-1",
    card="bg-gray-800 rounded-lg p-6 shadow-sm border border-gray-700",
    title="text-xl font-bold text-white",
    submit_button=f"flex-1 px-4 py-2 rounded-lg font-medium bg-[{ACCENT}] text-white hover:bg-[#ea4b85]",
    reset_button="px-4 py-2 rounded-lg font-medium bg-gray-700 text-gray-200 hover:bg-gray-600",
    notice_success="p-4 rounded-md bg-green-900/20 text-green-400",
    notice_failure="p-4 rounded-md bg-red-900/20 text-red-400",
)
