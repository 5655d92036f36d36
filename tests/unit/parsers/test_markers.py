import pytest

from atlin.parsers.markers import MarkerSet


class TestMarkerSet:
    def test_default_when_config_empty(self) -> None:
        markers = MarkerSet.from_config([])

        assert markers.markers == ("@",)
        assert markers.primary == "@"

    def test_default_when_only_empty_strings(self) -> None:
        assert MarkerSet.from_config(["", ""]).markers == ("@",)

    def test_primary_is_first_configured(self) -> None:
        markers = MarkerSet.from_config(["!", "@", "$"])

        assert markers.primary == "!"
        assert list(markers) == ["!", "@", "$"]

    def test_duplicates_keep_first_position(self) -> None:
        assert MarkerSet.from_config(["@", "!", "@"]).markers == ("@", "!")

    def test_membership(self) -> None:
        markers = MarkerSet.from_config(["@", "!"])

        assert "@" in markers
        assert "!" in markers
        assert "#" not in markers
        assert len(markers) == 2

    def test_rejects_multi_character_marker(self) -> None:
        with pytest.raises(ValueError, match="single character"):
            MarkerSet.from_config(["@@"])

    def test_rejects_backslash(self) -> None:
        with pytest.raises(ValueError, match="Invalid marker"):
            MarkerSet.from_config(["\\"])

    def test_rejects_whitespace(self) -> None:
        with pytest.raises(ValueError, match="Invalid marker"):
            MarkerSet.from_config([" "])

    def test_direct_construction_requires_markers(self) -> None:
        with pytest.raises(ValueError, match="at least one marker"):
            MarkerSet(())

    def test_is_frozen(self) -> None:
        markers = MarkerSet.from_config(["@"])

        with pytest.raises(AttributeError):
            markers.markers = ("!",)  # type: ignore
