"""Chart-ready series produced by the aggregation engine."""

from typing import Any, NamedTuple

from pydantic import BaseModel, ConfigDict


class Color(NamedTuple):
    """RGB color triple."""

    r: int
    g: int
    b: int

    def border(self) -> str:
        return f"rgb({self.r}, {self.g}, {self.b})"

    def background(self, alpha: float = 0.2) -> str:
        return f"rgba({self.r}, {self.g}, {self.b}, {alpha})"


class Dataset(BaseModel):
    """One line of a chart, aligned 1:1 with its series' labels."""

    model_config = ConfigDict(frozen=True)

    label: str
    data: tuple[int, ...] = ()
    color: Color
    background_color: Color | None = None  # defaults to a translucent border color
    fill: bool = True
    border_width: int = 1
    line_tension: float = 0.1

    def to_chart(self) -> dict[str, Any]:
        """Render as a line-chart dataset."""
        background = self.background_color or self.color
        return {
            "label": self.label,
            "data": list(self.data),
            "borderColor": self.color.border(),
            "backgroundColor": background.background(),
            "borderWidth": self.border_width,
            "fill": self.fill,
            "line": {"tension": self.line_tension},
        }


class OwnerSeries(BaseModel):
    """All of one owner's datasets, sharing one label axis."""

    model_config = ConfigDict(frozen=True)

    owner_id: int | str
    owner_handle: str = ""
    total: int = 0
    labels: tuple[str, ...] = ()
    datasets: tuple[Dataset, ...] = ()
    tick_interval: int = 1

    @property
    def title(self) -> str:
        return f"{self.owner_handle} ({self.total})"

    def to_chart(self) -> dict[str, Any]:
        """Render as the payload consumed by the line-chart component."""
        return {
            "owner_id": self.owner_id,
            "owner_handle": self.owner_handle,
            "total": self.total,
            "labels": list(self.labels),
            "datasets": [dataset.to_chart() for dataset in self.datasets],
            "tickMod": self.tick_interval,
        }
