"""Layout resolution: schema-level hints to concrete grid parameters."""

from dataclasses import dataclass

from form_engine.models.schema import Layout

# columns -> responsive grid classes
GRID_CLASSES: dict[int, str] = {
    1: "grid-cols-1",
    2: "grid-cols-1 md:grid-cols-2",
    3: "grid-cols-1 md:grid-cols-3",
    4: "grid-cols-1 md:grid-cols-2 lg:grid-cols-4",
}

# spacing -> (gap class, gap in px); fixed three-step scale
SPACING_SCALE: dict[str, tuple[str, int]] = {
    "compact": ("gap-4", 16),
    "normal": ("gap-6", 24),
    "relaxed": ("gap-8", 32),
}


@dataclass(frozen=True)
class ResolvedLayout:
    """Concrete arrangement of a form's fields."""

    columns: int
    spacing: str
    gap_px: int
    grid_class: str
    gap_class: str
    label_position: str = "top"

    @property
    def container_class(self) -> str:
        return f"grid {self.grid_class} {self.gap_class}"


def resolve_layout(layout: Layout | None) -> ResolvedLayout:
    """
    Resolve layout hints, defaulting to one column with normal spacing.

    Args:
        layout: The schema's layout block, or None.

    Returns:
        ResolvedLayout with grid and gap parameters.
    """
    layout = layout or Layout()
    gap_class, gap_px = SPACING_SCALE[layout.spacing]
    return ResolvedLayout(
        columns=layout.columns,
        spacing=layout.spacing,
        gap_px=gap_px,
        grid_class=GRID_CLASSES[layout.columns],
        gap_class=gap_class,
        label_position=layout.label_position,
    )
