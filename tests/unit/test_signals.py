"""
Unit tests for the ranking signals.
"""
import math
from datetime import timedelta

import pytest

from artfeed.models.schemas import FeedConfig, Viewer
from artfeed.services.signals import (
    EngagementSignal,
    PersonalizationSignal,
    QualitySignal,
    RecencySignal,
    TrendingSignal,
    hours_old,
)


class TestHoursOld:
    def test_truncates_partial_hours(self, make_artwork, now):
        artwork = make_artwork(hours=0)
        assert hours_old(artwork, now + timedelta(hours=48, minutes=59)) == 48

    def test_future_upload_is_negative(self, make_artwork, now):
        artwork = make_artwork(hours=-3)
        assert hours_old(artwork, now) == -3

    def test_naive_now_treated_as_utc(self, make_artwork, now):
        artwork = make_artwork(hours=6)
        assert hours_old(artwork, now.replace(tzinfo=None)) == 6


class TestRecencySignal:
    def test_fresh_upload_scores_one(self, make_artwork, cold_viewer, now, config):
        signal = RecencySignal(config)
        assert signal.score(make_artwork(hours=0), cold_viewer, now) == 1.0

    def test_decays_with_age(self, make_artwork, cold_viewer, now, config):
        signal = RecencySignal(config)
        day_old = signal.score(make_artwork(hours=24), cold_viewer, now)
        week_old = signal.score(make_artwork(hours=24 * 7), cold_viewer, now)

        assert day_old == pytest.approx(math.exp(-0.05))
        assert 0.0 < week_old < day_old < 1.0

    def test_future_upload_unclamped_by_default(self, make_artwork, cold_viewer, now, config):
        signal = RecencySignal(config)
        assert signal.score(make_artwork(hours=-48), cold_viewer, now) > 1.0

    def test_future_upload_clamped_when_enabled(self, make_artwork, cold_viewer, now):
        signal = RecencySignal(FeedConfig(clamp_future_recency=True))
        assert signal.score(make_artwork(hours=-48), cold_viewer, now) == 1.0

    def test_far_future_upload_does_not_overflow(self, make_artwork, cold_viewer, now, config):
        artwork = make_artwork(id="future", hours=-24 * 365 * 40)

        value = RecencySignal(config).score(artwork, cold_viewer, now)
        assert value > 1.0
        assert math.isfinite(value)

    def test_far_future_upload_clamped(self, make_artwork, cold_viewer, now):
        artwork = make_artwork(id="future", hours=-24 * 365 * 40)
        signal = RecencySignal(FeedConfig(clamp_future_recency=True))
        assert signal.score(artwork, cold_viewer, now) == 1.0


class TestEngagementSignal:
    def test_sigmoid_of_engagement_rate(self, make_artwork, cold_viewer, now, config):
        artwork = make_artwork(likes=250, views=1500, comments=30)
        assert artwork.engagement_rate == pytest.approx(0.2067, abs=1e-4)

        value = EngagementSignal(config).score(artwork, cold_viewer, now)
        expected = 1.0 / (1.0 + math.exp(-5 * (310 / 1500 - 0.1)))
        assert value == pytest.approx(expected)
        assert value > 0.5

    def test_no_views_is_not_zero(self, make_artwork, cold_viewer, now, config):
        artwork = make_artwork(likes=10, views=0, comments=3)
        assert artwork.engagement_rate == 0.0

        value = EngagementSignal(config).score(artwork, cold_viewer, now)
        assert value == pytest.approx(1.0 / (1.0 + math.exp(0.5)))
        assert 0.0 < value < 0.5

    def test_midpoint_rate_scores_half(self, make_artwork, cold_viewer, now, config):
        artwork = make_artwork(likes=10, views=100)
        assert EngagementSignal(config).score(artwork, cold_viewer, now) == pytest.approx(0.5)


class TestQualitySignal:
    @pytest.mark.parametrize("quality,expected", [(0, 0.0), (85, 0.85), (100, 1.0)])
    def test_linear_rescale(self, make_artwork, cold_viewer, now, config, quality, expected):
        artwork = make_artwork(quality_score=quality)
        assert QualitySignal(config).score(artwork, cold_viewer, now) == pytest.approx(expected)


class TestPersonalizationSignal:
    def test_cold_viewer_scores_zero(self, make_artwork, cold_viewer, now, config):
        artwork = make_artwork(tags={"fantasy"})
        assert PersonalizationSignal(config).score(artwork, cold_viewer, now) == 0.0

    def test_followed_artist_only(self, make_artwork, now, config):
        viewer = Viewer(id="v", followed_artists=frozenset({"artist1"}))
        artwork = make_artwork(artist_id="artist1")
        assert PersonalizationSignal(config).score(artwork, viewer, now) == pytest.approx(0.4)

    def test_tag_matches_weighted_by_interactions(self, make_artwork, now, config):
        viewer = Viewer(
            id="v",
            preferred_tags=frozenset({"fantasy", "sci-fi", "portrait", "environment"}),
            tag_interactions={"fantasy": 3},
        )
        artwork = make_artwork(tags={"fantasy", "portrait", "unrelated"})

        # fantasy: 0.05*3, portrait: 0.05*1 (untracked), coverage: 0.3 * 2/4
        expected = 0.15 + 0.05 + 0.15
        assert PersonalizationSignal(config).score(artwork, viewer, now) == pytest.approx(expected)

    def test_preferred_category(self, make_artwork, now, config):
        viewer = Viewer(id="v", preferred_categories=frozenset({"3d"}))
        assert PersonalizationSignal(config).score(
            make_artwork(category="3d"), viewer, now
        ) == pytest.approx(0.2)
        assert PersonalizationSignal(config).score(
            make_artwork(category="illustration"), viewer, now
        ) == 0.0

    def test_liked_penalty_applies_after_additive_terms(self, make_artwork, now, config):
        viewer = Viewer(
            id="v",
            followed_artists=frozenset({"artist1"}),
            liked_artworks=frozenset({"a1"}),
            preferred_tags=frozenset({"fantasy"}),
        )
        artwork = make_artwork(id="a1", artist_id="artist1", tags={"fantasy"})

        # (0.4 follow + 0.05 tag + 0.3 coverage) * 0.1
        assert PersonalizationSignal(config).score(artwork, viewer, now) == pytest.approx(0.075)

    def test_liked_penalty_applies_before_clamp(self, make_artwork, demo_viewer, now, config):
        viewer = demo_viewer.model_copy(update={"liked_artworks": frozenset({"art1"})})
        artwork = make_artwork(
            id="art1",
            artist_id="artist1",
            tags={"fantasy", "character-design"},
            category="illustration",
        )

        # Unpenalized total is 1.6: 0.4 + 0.75 + 0.05 + 0.2 + 0.2
        assert PersonalizationSignal(config).score(artwork, demo_viewer, now) == 1.0
        assert PersonalizationSignal(config).score(artwork, viewer, now) == pytest.approx(0.16)


class TestTrendingSignal:
    def test_exactly_48_hours_still_trending(self, make_artwork, cold_viewer, now, config):
        artwork = make_artwork(hours=48, likes=100)
        assert TrendingSignal(config).score(artwork, cold_viewer, now) == pytest.approx(100 / 48 / 100)

    def test_49_hours_outside_window(self, make_artwork, cold_viewer, now, config):
        artwork = make_artwork(hours=49, likes=100_000)
        assert TrendingSignal(config).score(artwork, cold_viewer, now) == 0.0

    def test_zero_hours_uses_raw_velocity(self, make_artwork, cold_viewer, now, config):
        artwork = make_artwork(hours=0, likes=50, comments=10)
        assert TrendingSignal(config).score(artwork, cold_viewer, now) == pytest.approx(0.7)

    def test_velocity_saturates(self, make_artwork, cold_viewer, now, config):
        artwork = make_artwork(hours=2, likes=500, comments=60)
        assert TrendingSignal(config).score(artwork, cold_viewer, now) == 1.0
