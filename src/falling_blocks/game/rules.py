

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    points_per_line: int = 100

    def score_for_lines(self, lines: int) -> int:
        # Flat rate: four rows in one lock are worth exactly 4 * points_per_line
        if lines <= 0:
            return 0
        return self.points_per_line * int(lines)
