"""Tests for guessit-backed filename parsing."""

from unittest.mock import patch

from mediashelf.clients.filename_parser import FilenameParser, ParsedName


class TestFilenameParser:
    def test_movie_filename(self):
        parsed = FilenameParser().parse("Inception.2010.1080p.BluRay.x264.mkv")
        assert parsed.title == "Inception"
        assert parsed.season is None
        assert parsed.episode is None
        assert not parsed.is_episode

    def test_episode_filename(self):
        parsed = FilenameParser().parse("Foo.S01E02.720p.HDTV.mkv")
        assert parsed.title == "Foo"
        assert parsed.season == "1"
        assert parsed.episode == "2"
        assert parsed.is_episode

    def test_multi_episode_keeps_first(self):
        parsed = FilenameParser().parse("Foo.S02E03E04.mkv")
        assert parsed.season == "2"
        assert parsed.episode == "3"

    def test_guessit_failure_falls_back_to_stem(self):
        with patch("mediashelf.clients.filename_parser.guessit", side_effect=RuntimeError):
            parsed = FilenameParser().parse("weird name.mp4")
        assert parsed == ParsedName(title="weird name")

    def test_season_without_episode_is_not_an_episode(self):
        assert not ParsedName(title="Foo", season="1").is_episode
