import pytest

from sitemap_builder.entries import ImageEntry, NewsEntry, VideoEntry
from sitemap_builder.exceptions import SitemapValidationError


def test_image_items_put_loc_first():
    image = ImageEntry("https://example.com/a.png", {"title": "A", "geo_location": "Paris"})
    assert list(image.items()) == [
        ("loc", "https://example.com/a.png"),
        ("title", "A"),
        ("geo_location", "Paris"),
    ]


def test_image_rejects_invalid_field_names():
    with pytest.raises(SitemapValidationError, match="not a valid tag"):
        ImageEntry("https://example.com/a.png", {"bad name": "x"})


@pytest.mark.parametrize(
    "options, missing",
    [
        pytest.param(
            {"description": "d", "content_loc": "c"}, "thumbnail_loc", id="thumbnail"
        ),
        pytest.param(
            {"thumbnail_loc": "t", "player_loc": "p"}, "description", id="description"
        ),
        pytest.param(
            {"thumbnail_loc": "t", "description": "d"},
            "content_loc or player_loc",
            id="content",
        ),
    ],
)
def test_video_validation_names_missing_field(options, missing):
    """Tests VideoEntry fails before it can be attached to a URL."""
    with pytest.raises(SitemapValidationError, match=missing):
        VideoEntry.from_options("Title", options)


def test_video_title_argument_wins():
    video = VideoEntry.from_options(
        "Real title",
        {"title": "Ignored", "thumbnail_loc": "t", "description": "d", "content_loc": "c"},
    )
    assert video.fields["title"] == "Real title"


def test_video_thumbnail_alias_is_renamed():
    video = VideoEntry.from_options(
        "T", {"thumbnail": "t.jpg", "description": "d", "content_loc": "c"}
    )
    assert "thumbnail" not in video.fields
    assert video.fields["thumbnail_loc"] == "t.jpg"


def test_video_with_none_field_counts_as_missing():
    with pytest.raises(SitemapValidationError):
        VideoEntry.from_options(
            "T", {"thumbnail_loc": "t", "description": None, "player_loc": "p"}
        )


def test_news_requires_publication():
    with pytest.raises(SitemapValidationError, match="name"):
        NewsEntry("", "en")
    with pytest.raises(SitemapValidationError, match="language"):
        NewsEntry("Times", "")


def test_news_items_skip_publication_fields():
    news = NewsEntry("Times", "en", {"name": "dup", "title": "T", "keywords": "a, b"})
    assert list(news.items()) == [("title", "T"), ("keywords", "a, b")]


@pytest.mark.parametrize(
    "build",
    [
        pytest.param(lambda: ImageEntry("https://example.com/\x0b.png"), id="image_loc"),
        pytest.param(
            lambda: VideoEntry.from_options(
                "Tab\x0cbed", {"thumbnail_loc": "t", "description": "d", "content_loc": "c"}
            ),
            id="video_title",
        ),
        pytest.param(lambda: NewsEntry("Times\x00", "en"), id="news_name"),
        pytest.param(lambda: NewsEntry("Times", "en", {"title": "\x08"}), id="news_field"),
    ],
)
def test_control_characters_are_rejected(build):
    with pytest.raises(SitemapValidationError, match="invalid XML characters"):
        build()


def test_tabs_and_newlines_are_allowed():
    image = ImageEntry("https://example.com/a.png", {"caption": "line one\n\tline two\r"})
    assert ("caption", "line one\n\tline two\r") in list(image.items())


def test_image_items_skip_none():
    image = ImageEntry("https://example.com/a.png", {"caption": None})
    assert list(image.items()) == [("loc", "https://example.com/a.png")]
