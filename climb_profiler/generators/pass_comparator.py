"""Side-by-side comparison of two pass visualizations.

The second pass is the reference: differences are pass1 - pass2 and
percentage differences are relative to pass2. Difficulty labels are compared
on an ordinal scale that accepts tier keys, English and French labels;
unknown labels rank as "difficult".
"""

import logging

from climb_profiler.constants import DifficultyConfig
from climb_profiler.model.visualization import (
    ColorSegmentedVisualization,
    MetricComparison,
    PassComparison,
    TierComparison,
)

logger = logging.getLogger(__name__)

DIFFICULTY_SCALE = {
    "easy": 1,
    "moderate": 2,
    "difficult": 3,
    "very difficult": 4,
    "verydifficult": 4,
    "extreme": 5,
    "facile": 1,
    "modéré": 2,
    "difficile": 3,
    "très difficile": 4,
    "extrême": 5,
}
UNKNOWN_DIFFICULTY_RANK = 3


def difficulty_rank(label: str | None) -> int:
    """Ordinal rank (1-5) of a difficulty label."""
    return DIFFICULTY_SCALE.get((label or "").strip().lower(), UNKNOWN_DIFFICULTY_RANK)


class PassComparator:
    """Compares two ColorSegmentedVisualizations."""

    def compare(self, vis1: ColorSegmentedVisualization, vis2: ColorSegmentedVisualization) -> PassComparison:
        comparison = PassComparison(
            visualization1=vis1,
            visualization2=vis2,
            length=MetricComparison.of(vis1.length, vis2.length),
            elevation_gain=MetricComparison.of(vis1.summary.elevation_gain, vis2.summary.elevation_gain),
            average_gradient=MetricComparison.of(vis1.summary.average_gradient, vis2.summary.average_gradient),
            max_gradient=MetricComparison.of(vis1.summary.max_gradient, vis2.summary.max_gradient),
            difficulty_comparison=self.compare_difficulty(vis1.difficulty, vis2.difficulty),
            segments_by_difficulty=self.compare_distribution(vis1, vis2),
            analysis=self.analysis_lines(vis1, vis2),
        )
        logger.info(f"Compared {vis1.id} with {vis2.id}: {comparison.difficulty_comparison}")
        return comparison

    @staticmethod
    def compare_difficulty(difficulty1: str, difficulty2: str) -> str:
        rank1, rank2 = difficulty_rank(difficulty1), difficulty_rank(difficulty2)
        if rank1 == rank2:
            return "Même niveau de difficulté"
        if rank1 > rank2:
            return f"{difficulty1} est plus difficile que {difficulty2}"
        return f"{difficulty1} est plus facile que {difficulty2}"

    @staticmethod
    def compare_distribution(
        vis1: ColorSegmentedVisualization,
        vis2: ColorSegmentedVisualization,
    ) -> dict[str, TierComparison]:
        """Per-tier share and length of both passes, tiers missing on one side count as 0."""
        buckets1 = {b.difficulty: b for b in vis1.segments_by_difficulty}
        buckets2 = {b.difficulty: b for b in vis2.segments_by_difficulty}
        tiers = [t for t in DifficultyConfig.TIERS if t in buckets1 or t in buckets2]

        result: dict[str, TierComparison] = {}
        for tier in tiers:
            b1, b2 = buckets1.get(tier), buckets2.get(tier)
            pct1 = b1.percentage if b1 else 0.0
            pct2 = b2.percentage if b2 else 0.0
            result[tier] = TierComparison(
                percentage_pass1=pct1,
                percentage_pass2=pct2,
                difference=pct1 - pct2,
                length_pass1=b1.total_length if b1 else 0.0,
                length_pass2=b2.total_length if b2 else 0.0,
            )
        return result

    @staticmethod
    def analysis_lines(vis1: ColorSegmentedVisualization, vis2: ColorSegmentedVisualization) -> list[str]:
        """Plain-language comparison, recommendation last."""
        name1, name2 = vis1.name, vis2.name
        s1, s2 = vis1.summary, vis2.summary
        lines = []

        if vis1.length > vis2.length:
            lines.append(f"{name1} est plus long de {vis1.length - vis2.length:.1f}km par rapport à {name2}.")
        elif vis1.length < vis2.length:
            lines.append(f"{name1} est plus court de {vis2.length - vis1.length:.1f}km par rapport à {name2}.")
        else:
            lines.append(f"{name1} et {name2} ont la même longueur ({vis1.length}km).")

        gain1, gain2 = s1.elevation_gain, s2.elevation_gain
        if gain1 > gain2:
            lines.append(f"{name1} présente un dénivelé positif supérieur de {gain1 - gain2:.0f}m.")
        elif gain1 < gain2:
            lines.append(f"{name1} présente un dénivelé positif inférieur de {gain2 - gain1:.0f}m.")
        else:
            lines.append(f"Les deux cols présentent le même dénivelé positif ({gain1:.0f}m).")

        avg1, avg2 = s1.average_gradient, s2.average_gradient
        if avg1 > avg2:
            lines.append(
                f"La pente moyenne de {name1} ({avg1:.1f}%) est plus raide que celle de {name2} ({avg2:.1f}%)."
            )
        elif avg1 < avg2:
            lines.append(
                f"La pente moyenne de {name1} ({avg1:.1f}%) est plus douce que celle de {name2} ({avg2:.1f}%)."
            )
        else:
            lines.append(f"Les deux cols ont la même pente moyenne ({avg1:.1f}%).")

        max1, max2 = s1.max_gradient, s2.max_gradient
        if max1 > max2:
            lines.append(
                f"{name1} possède des passages plus raides, avec une pente maximale de {max1:.1f}% "
                f"contre {max2:.1f}% pour {name2}."
            )
        elif max1 < max2:
            lines.append(
                f"{name2} possède des passages plus raides, avec une pente maximale de {max2:.1f}% "
                f"contre {max1:.1f}% pour {name1}."
            )
        else:
            lines.append(f"Les deux cols ont la même pente maximale ({max1:.1f}%).")

        lines.append(PassComparator.recommendation(vis1, vis2))
        return lines

    @staticmethod
    def recommendation(vis1: ColorSegmentedVisualization, vis2: ColorSegmentedVisualization) -> str:
        rank1, rank2 = difficulty_rank(vis1.difficulty), difficulty_rank(vis2.difficulty)

        strengths1: list[str] = []
        strengths2: list[str] = []
        for value1, value2, label in (
            (vis1.length, vis2.length, "plus court"),
            (vis1.summary.average_gradient, vis2.summary.average_gradient, "pente moyenne plus douce"),
            (vis1.summary.max_gradient, vis2.summary.max_gradient, "passages moins abrupts"),
        ):
            if value1 < value2:
                strengths1.append(label)
            elif value1 > value2:
                strengths2.append(label)

        if rank1 == rank2:
            text = "En conclusion, les deux cols présentent un niveau de difficulté comparable"
            if strengths1:
                text += f", avec {vis1.name} qui se distingue par {' et '.join(strengths1)}"
            if strengths2:
                text += f" et {vis2.name} qui offre l'avantage d'être {' et '.join(strengths2)}"
            return text + "."

        if rank1 < rank2:
            easier, harder, easier_strengths, harder_strengths = vis1, vis2, strengths1, strengths2
        else:
            easier, harder, easier_strengths, harder_strengths = vis2, vis1, strengths2, strengths1

        text = f"En conclusion, {easier.name} est globalement plus accessible"
        if easier_strengths:
            text += f" car il est {' et '.join(easier_strengths)}"
        text += f". {harder.name} conviendra davantage aux cyclistes cherchant un défi plus relevé"
        if harder_strengths:
            text += f", bien qu'il présente l'avantage d'être {' et '.join(harder_strengths)}"
        return text + "."
