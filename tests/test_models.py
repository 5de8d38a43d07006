"""Tests for data models."""

from datetime import datetime, timezone

from emstracker.models import Settings, TrackingStatusInfo


class TestTrackingStatusInfo:
    """Tests for TrackingStatusInfo model."""

    def test_defaults_are_empty(self):
        """Test every field is optional."""
        info = TrackingStatusInfo()

        assert info.date is None
        assert info.zip_code is None
        assert info.description is None
        assert info.status is None
        assert info.weight is None

    def test_structural_equality(self):
        date = datetime(2016, 11, 24, 16, 30, tzinfo=timezone.utc)

        first = TrackingStatusInfo(date=date, zip_code="190882", weight="-")
        second = TrackingStatusInfo(date=date, zip_code="190882", weight="-")

        assert first == second
        assert first != TrackingStatusInfo(date=date, zip_code="200994", weight="-")

    def test_serialization(self):
        """Test event JSON serialization."""
        info = TrackingStatusInfo(
            date=datetime(2016, 11, 25, 0, 10, tzinfo=timezone.utc),
            zip_code="200994",
            status="Сортировка",
        )

        json_data = info.model_dump_json()
        assert "2016-11-25T00:10:00Z" in json_data
        assert "200994" in json_data


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self):
        settings = Settings()

        assert settings.tracking_code is None
        assert settings.carrier == "ems"
