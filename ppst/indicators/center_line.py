"""Pivot center line: center = (center_prev * 2 + pivot) / 3."""

from typing import Optional


class PivotCenterLine:
    """Running reference price, moved only by confirmed pivots."""

    def __init__(self):
        self.center: Optional[float] = None

    def update(self, pivot_price: float) -> float:
        if self.center is None:
            self.center = pivot_price
        else:
            self.center = (self.center * 2 + pivot_price) / 3
        return self.center

    def get(self) -> Optional[float]:
        return self.center
