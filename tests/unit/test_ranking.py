"""
Unit tests for RankingEngine service.
"""
import pytest

from artfeed.models.schemas import FeedConfig
from artfeed.services.ranking import RankingEngine


class TestRankingEngine:
    def test_composite_is_weighted_sum(self, make_artwork, demo_viewer, now):
        engine = RankingEngine()
        artwork = make_artwork(
            id="art1",
            artist_id="artist1",
            tags={"fantasy", "character-design"},
            hours=5,
            likes=250,
            views=1500,
            comments=30,
            quality_score=85.0,
        )

        scored = engine.score(artwork, demo_viewer, now)

        b = scored.breakdown
        assert set(b) == {"recency", "engagement", "quality", "personalization", "trending"}
        expected = (
            0.25 * b["recency"]
            + 0.20 * b["engagement"]
            + 0.15 * b["quality"]
            + 0.25 * b["personalization"]
            + 0.15 * b["trending"]
        )
        assert scored.score == pytest.approx(expected)
        assert b["quality"] == pytest.approx(0.85)
        assert b["personalization"] == 1.0
        assert b["trending"] == pytest.approx(0.62)

    def test_composite_stays_in_unit_interval(self, make_artwork, demo_viewer, now):
        engine = RankingEngine()
        artworks = [
            make_artwork(id="best", hours=0, likes=10_000, views=10_000, comments=10_000,
                         quality_score=100, tags={"fantasy", "concept-art", "character-design"}),
            make_artwork(id="worst", artist_id="nobody", category="3d", hours=24 * 365,
                         quality_score=0),
        ]

        for scored in engine.score_all(artworks, demo_viewer, now):
            assert 0.0 <= scored.score <= 1.0

    def test_rank_orders_by_score_descending(self, make_artwork, cold_viewer, now):
        engine = RankingEngine()
        artworks = [
            make_artwork(id="low", quality_score=10),
            make_artwork(id="high", quality_score=90),
            make_artwork(id="mid", quality_score=50),
        ]

        ranked = engine.rank(artworks, cold_viewer, now)

        assert [s.artwork.id for s in ranked] == ["high", "mid", "low"]

    def test_ties_keep_input_order(self, make_artwork, cold_viewer, now):
        engine = RankingEngine()
        artworks = [make_artwork(id=f"t{i}", artist_id=f"artist{i}") for i in range(6)]

        ranked = engine.rank(artworks, cold_viewer, now)

        assert len({s.score for s in ranked}) == 1
        assert [s.artwork.id for s in ranked] == [f"t{i}" for i in range(6)]

    def test_parallel_scoring_matches_sequential(self, make_artwork, demo_viewer, now):
        artworks = [
            make_artwork(
                id=f"p{i}",
                artist_id=f"artist{i % 7}",
                hours=i % 60,
                likes=(i * 37) % 400,
                views=1000,
                comments=i % 11,
                quality_score=float(i % 100),
                tags={"fantasy"} if i % 3 == 0 else {"portrait"},
            )
            for i in range(40)
        ]
        sequential = RankingEngine(FeedConfig())
        parallel = RankingEngine(FeedConfig(parallel_threshold=1, scoring_workers=3))

        seq_ranked = sequential.rank(artworks, demo_viewer, now)
        par_ranked = parallel.rank(artworks, demo_viewer, now)

        assert [s.artwork.id for s in par_ranked] == [s.artwork.id for s in seq_ranked]
        assert [s.score for s in par_ranked] == [s.score for s in seq_ranked]

    def test_empty_catalogue(self, cold_viewer, now):
        assert RankingEngine().rank([], cold_viewer, now) == []
