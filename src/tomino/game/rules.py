from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    line_clear_scores: tuple[int, int, int, int] = (100, 300, 500, 800)
    soft_drop_points: int = 1
    hard_drop_points_per_row: int = 2
    matching_block_points: int = 50
    rows_per_level: int = 10
    base_fall_delay: float = 1.0
    fall_delay_step: float = 0.1
    min_fall_delay: float = 0.1

    def score_for_lines(self, lines: int) -> int:
        if lines <= 0:
            return 0
        if 1 <= lines <= 4:
            return self.line_clear_scores[lines - 1]
        # each row past four is worth another 400
        return self.line_clear_scores[-1] + (lines - 4) * 400


class Score:
    def __init__(self, rules: ScoringRules | None = None) -> None:
        self.rules = rules or ScoringRules()
        self.value = 0

    def piece_moved_down(self) -> None:
        self.value += self.rules.soft_drop_points

    def piece_finished_falling(self, rows_dropped: int) -> None:
        self.value += rows_dropped * self.rules.hard_drop_points_per_row

    def rows_cleared(self, count: int) -> None:
        self.value += self.rules.score_for_lines(count)

    def matching_blocks_cleared(self, count: int) -> None:
        self.value += max(0, count) * self.rules.matching_block_points


class Level:
    """Tracks cleared rows and the resulting fall speed."""

    def __init__(self, rules: ScoringRules | None = None) -> None:
        self.rules = rules or ScoringRules()
        self.number = 1
        self.rows = 0

    @property
    def fall_delay(self) -> float:
        delay = self.rules.base_fall_delay - self.rules.fall_delay_step * (self.number - 1)
        return max(self.rules.min_fall_delay, delay)

    def rows_cleared(self, count: int) -> bool:
        """Record cleared rows; returns True when the level went up."""
        self.rows += max(0, count)
        previous = self.number
        self.number = self.rows // self.rules.rows_per_level + 1
        return self.number > previous
