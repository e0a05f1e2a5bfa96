"""Tests for the load_posts management command."""

from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from apps.posts.management.commands.load_posts import SAMPLE_POSTS
from apps.posts.models import Post


@pytest.mark.django_db
class TestLoadPosts:
    def test_loads_rows_and_reports_failures(self, tmp_path):
        csv_file = tmp_path / "posts.csv"
        csv_file.write_text(
            "title,content,author\n"
            " First , body one , alice \n"
            "Second,body two,bob\n"
            "   ,no title,carol\n",
            encoding="utf-8",
        )
        out, err = StringIO(), StringIO()

        call_command("load_posts", str(csv_file), stdout=out, stderr=err)

        assert Post.objects.count() == 2
        assert Post.objects.filter(title="First", author="alice").exists()
        assert "Created 2 posts, 1 failed" in out.getvalue()
        assert "Line 4" in err.getvalue()

    def test_missing_file(self, tmp_path):
        with pytest.raises(CommandError, match="CSV file not found"):
            call_command("load_posts", str(tmp_path / "missing.csv"))

    def test_requires_path_or_sample(self):
        with pytest.raises(CommandError):
            call_command("load_posts")

    def test_sample_only_fills_empty_store(self):
        out = StringIO()

        call_command("load_posts", "--sample", stdout=out)
        call_command("load_posts", "--sample", stdout=out)

        assert Post.objects.count() == len(SAMPLE_POSTS)
        assert "skipping sample data" in out.getvalue()
