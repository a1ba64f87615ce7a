"""
Batch ranking of candidate segments for nearest-segment lookup.

A spatial index (outside this package) hands us a table of candidate segments near a
query point. We rank them in two passes:
1) Compute the integer ordering approximation for every row (cheap, not metric).
2) Keep the best `max_candidates` rows and run the full projection on those only.
3) Sort the survivors by metric distance and return projection details per row.

The ordering approximation shares its projection math with the full projection, so the
prefilter keeps the same segments the full projection would rank best.
"""

from __future__ import annotations

# `logging` reports batch sizes so slow lookups can be traced to oversized candidate sets.
import logging
# `dataclass` gives us an immutable config object built from settings.
from dataclasses import dataclass
# `Any` is used for settings dicts loaded from YAML.
from typing import Any, Optional

# pandas is the table container for candidate segments and results.
import pandas as pd

from routegeo.coordinate import FixedPointCoordinate, require_set
from routegeo.spatial.distance import ordered_perpendicular_distance
from routegeo.spatial.projection import project_onto_segment

logger = logging.getLogger(__name__)

SEGMENT_COLUMNS = ("source_lat", "source_lon", "target_lat", "target_lon")


@dataclass(frozen=True)
class RankingConfig:
    max_candidates: int = 10
    id_col: str = "id"


def build_ranking_config(settings: dict[str, Any]) -> RankingConfig:
    ranking = settings.get("ranking", {}) or {}
    max_candidates = int(ranking.get("max_candidates", RankingConfig.max_candidates))
    # Zero candidates would make every lookup return nothing, which is never what a caller wants.
    if max_candidates <= 0:
        raise ValueError("ranking.max_candidates must be > 0")
    return RankingConfig(max_candidates=max_candidates, id_col=str(ranking.get("id_col", RankingConfig.id_col)))


def rank_candidate_segments(
    query: Optional[FixedPointCoordinate],
    candidates: pd.DataFrame,
    *,
    config: RankingConfig = RankingConfig(),
) -> pd.DataFrame:
    # Fail fast on a missing query point, exactly like the single-segment entry points.
    query = require_set(query, "query")

    # Validate required columns before doing any per-row work.
    missing = {config.id_col, *SEGMENT_COLUMNS} - set(candidates.columns)
    if missing:
        raise ValueError(f"Missing candidate columns: {sorted(missing)}")

    # Work on a copy so callers do not see their input DataFrame mutated by added columns.
    df = candidates.copy()
    # Scaled coordinates are integers; cast once so FixedPointCoordinate receives plain ints.
    for col in SEGMENT_COLUMNS:
        df[col] = df[col].astype("int64")

    # Build endpoint coordinates row by row; unset endpoints raise here, before any ranking happens.
    sources = [FixedPointCoordinate(int(lat), int(lon)) for lat, lon in zip(df["source_lat"], df["source_lon"])]
    targets = [FixedPointCoordinate(int(lat), int(lon)) for lat, lon in zip(df["target_lat"], df["target_lon"])]

    # Pass 1: cheap ordering value for every candidate.
    df["ordered_distance"] = [ordered_perpendicular_distance(query, s, t) for s, t in zip(sources, targets)]
    # Keep row positions so we can find the endpoint objects for the survivors.
    df["_pos"] = range(len(df))
    # `kind="stable"` keeps input order among ties so results are deterministic across runs.
    shortlist = df.sort_values("ordered_distance", kind="stable").head(config.max_candidates).copy()

    # Pass 2: full projection on the shortlist only.
    projections = [project_onto_segment(query, sources[pos], targets[pos]) for pos in shortlist["_pos"]]
    shortlist["distance_m"] = [pr.distance for pr in projections]
    shortlist["ratio"] = [pr.ratio for pr in projections]
    shortlist["nearest_lat"] = [pr.nearest.lat for pr in projections]
    shortlist["nearest_lon"] = [pr.nearest.lon for pr in projections]

    logger.info("Ranked %d candidate segments, kept %d", len(df), len(shortlist))

    # Metric distance decides the final order; the ordering value only decided who got this far.
    out = shortlist.drop(columns=["_pos"]).sort_values("distance_m", kind="stable")
    return out.reset_index(drop=True)
