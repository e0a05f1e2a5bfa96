"""Django management command to load posts from a CSV file."""

import csv
from pathlib import Path
from typing import Any

from django.core.management.base import BaseCommand, CommandError, CommandParser
from tqdm import tqdm

from apps.posts.exceptions import PostServiceError
from apps.posts.services import PostService

SAMPLE_POSTS = [
    {
        "title": "Welcome!",
        "content": "This is a small blog for trying out ConfigMaps and Secrets on Kubernetes.",
        "author": "K8s admin",
    },
    {
        "title": "Managing configuration",
        "content": "ConfigMaps keep per-environment settings out of the container image.",
        "author": "developer",
    },
    {
        "title": "Managing secrets",
        "content": "Secrets hold sensitive values such as database passwords.",
        "author": "security team",
    },
]


class Command(BaseCommand):
    """
    Load posts from a CSV file with ``title``, ``content`` and ``author`` columns.

    Every row goes through ``PostService.create_post``, so values are trimmed
    and validated exactly as API input is. Invalid rows are reported and
    skipped.

    Usage:
        python manage.py load_posts posts.csv
        python manage.py load_posts --sample
    """

    help = "Load posts from a CSV file, or insert sample posts into an empty store"

    def add_arguments(self, parser: CommandParser) -> None:
        parser.add_argument("csv_path", nargs="?", help="Path to a CSV file")
        parser.add_argument(
            "--sample",
            action="store_true",
            help="Insert the sample posts when no posts exist yet",
        )

    def handle(self, *args: Any, **options: Any) -> None:
        service = PostService()

        if options["sample"]:
            self._load_sample(service)
            return

        if not options["csv_path"]:
            raise CommandError("Provide a CSV path or use --sample")

        csv_path = Path(options["csv_path"])
        if not csv_path.exists():
            raise CommandError(f"CSV file not found: {csv_path.absolute()}")

        with open(csv_path, encoding="utf-8", newline="") as f:
            rows = list(csv.DictReader(f))

        self.stdout.write(self.style.SUCCESS(f"Found {len(rows)} posts in {csv_path}"))

        created_count = 0
        failed_count = 0
        for line_number, row in enumerate(tqdm(rows, desc="Loading posts"), start=2):
            try:
                service.create_post(
                    title=row.get("title") or "",
                    content=row.get("content") or "",
                    author=row.get("author") or "",
                )
                created_count += 1
            except PostServiceError as e:
                failed_count += 1
                self.stderr.write(f"Line {line_number}: {e}")

        self.stdout.write(
            self.style.SUCCESS(f"Created {created_count} posts, {failed_count} failed")
        )

    def _load_sample(self, service: PostService) -> None:
        if service.store.count():
            self.stdout.write(self.style.WARNING("Posts already exist, skipping sample data"))
            return

        for post in SAMPLE_POSTS:
            service.create_post(**post)
        self.stdout.write(self.style.SUCCESS(f"Inserted {len(SAMPLE_POSTS)} sample posts"))
