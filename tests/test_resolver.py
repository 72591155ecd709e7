"""Tests for identifier resolution."""

import pytest

from folio.lib.resolver import (
    DEFAULT_TEMPLATES,
    MediaKind,
    UrlTemplates,
    drive_identifier,
    normalize_identifier,
    resolve,
    resolve_reference,
    split_reference,
)

IMAGE_LIKE = [MediaKind.IMAGE, MediaKind.ICON, MediaKind.AVATAR, MediaKind.COVER]


class TestNormalizeIdentifier:
    @pytest.mark.parametrize("value", [None, "", "   ", "\t\n", 42, ["abc"]])
    def test_no_asset_values(self, value):
        assert normalize_identifier(value) is None

    def test_strips_whitespace(self):
        assert normalize_identifier("  1AbC  ") == "1AbC"


class TestResolve:
    @pytest.mark.parametrize("kind", IMAGE_LIKE)
    def test_image_like_kinds_have_view_then_thumbnail(self, kind):
        candidates = resolve("1AbC-xyz_9", kind)

        assert len(candidates) == 2
        assert candidates[0] != candidates[1]
        assert all("1AbC-xyz_9" in url for url in candidates)
        assert candidates[0] == "https://drive.google.com/uc?export=view&id=1AbC-xyz_9"
        assert candidates[1] == "https://drive.google.com/thumbnail?id=1AbC-xyz_9&sz=w1000"

    def test_video_has_single_preview(self):
        candidates = resolve("vid123", MediaKind.VIDEO)
        assert candidates == ("https://drive.google.com/file/d/vid123/preview",)

    @pytest.mark.parametrize("kind", list(MediaKind))
    @pytest.mark.parametrize("identifier", [None, "", "  "])
    def test_missing_identifier_resolves_to_nothing(self, identifier, kind):
        assert resolve(identifier, kind) == ()

    def test_accepts_kind_string(self):
        assert resolve("abc", "video") == resolve("abc", MediaKind.VIDEO)

    def test_returns_immutable_tuple(self):
        assert isinstance(resolve("abc", MediaKind.IMAGE), tuple)

    def test_custom_thumbnail_size(self):
        templates = UrlTemplates(thumbnail_size=400)
        assert resolve("abc", MediaKind.IMAGE, templates)[1].endswith("sz=w400")


class TestViaProxy:
    def test_direct_candidate_points_at_proxy(self):
        templates = DEFAULT_TEMPLATES.via_proxy("https://folio.example.com/")
        candidates = resolve("abc", MediaKind.COVER, templates)

        assert candidates[0] == "https://folio.example.com/asset/abc"
        assert candidates[1] == "https://drive.google.com/thumbnail?id=abc&sz=w1000"

    def test_video_unaffected(self):
        templates = DEFAULT_TEMPLATES.via_proxy("https://folio.example.com")
        assert resolve("abc", MediaKind.VIDEO, templates) == resolve("abc", MediaKind.VIDEO)


class TestDriveIdentifier:
    @pytest.mark.parametrize(
        "url",
        [
            "https://drive.google.com/uc?export=view&id=1AbC",
            "https://drive.google.com/open?id=1AbC",
            "https://drive.google.com/thumbnail?id=1AbC&sz=w1000",
            "https://drive.google.com/file/d/1AbC/view?usp=sharing",
            "https://drive.google.com/file/d/1AbC/preview",
            "https://docs.google.com/file/d/1AbC",
        ],
    )
    def test_extracts_identifier(self, url):
        assert drive_identifier(url) == "1AbC"

    @pytest.mark.parametrize(
        "url",
        [
            "https://example.com/me.png?id=1AbC",
            "https://drive.google.com/drive/folders",
            "https://drive.google.com/uc?export=view",
        ],
    )
    def test_non_drive_file_urls(self, url):
        assert drive_identifier(url) is None


class TestResolveReference:
    def test_drive_url_resolves_through_its_identifier(self):
        url = "https://drive.google.com/uc?export=view&id=1AbC"
        assert resolve_reference(url, MediaKind.IMAGE) == resolve("1AbC", MediaKind.IMAGE)

    def test_drive_video_url_resolves_to_preview(self):
        url = "https://drive.google.com/file/d/vid9/view"
        assert resolve_reference(url, MediaKind.VIDEO) == (
            "https://drive.google.com/file/d/vid9/preview",
        )

    def test_foreign_url_is_sole_candidate(self):
        url = "https://example.com/me.png"
        assert resolve_reference(url, MediaKind.AVATAR) == (url,)

    def test_plain_identifier_still_resolves(self):
        assert resolve_reference("1AbC", MediaKind.IMAGE) == resolve("1AbC", MediaKind.IMAGE)

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_missing_value(self, value):
        assert resolve_reference(value, MediaKind.IMAGE) == ()

    def test_split_reference(self):
        assert split_reference(" https://example.com/a.mp4 ") == (
            "https://example.com/a.mp4",
            "https://example.com/a.mp4",
        )
        assert split_reference("https://drive.google.com/open?id=x1") == ("x1", None)
        assert split_reference("x1") == ("x1", None)
