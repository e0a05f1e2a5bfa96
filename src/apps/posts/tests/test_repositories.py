"""
Unit tests for the post store.
"""

from datetime import timedelta

import pytest
from django.db import DatabaseError, connection
from django.test.utils import CaptureQueriesContext
from django.utils import timezone
from faker import Faker

from apps.posts.exceptions import PostNotFound, StorageError
from apps.posts.models import Post
from apps.posts.repositories import PostStore

fake = Faker()


@pytest.fixture
def store():
    return PostStore()


@pytest.mark.django_db
class TestCreate:
    def test_create_assigns_id_and_timestamps(self, store):
        """
        Tests that create persists the post and fills in server-side fields.
        """
        # Arrange
        title, content, author = fake.sentence(), fake.paragraph(), "alice"

        # Act
        post = store.create(title=title, content=content, author=author)

        # Assert
        assert Post.objects.count() == 1
        assert post.id is not None
        assert post.title == title
        assert post.view_count == 0
        assert post.created_at is not None
        assert post.updated_at is not None

    def test_ids_are_unique(self, store):
        first = store.create(title="a", content="b", author="c")
        second = store.create(title="a", content="b", author="c")

        assert first.id != second.id

    @pytest.mark.parametrize(
        "field, value",
        [
            ("title", "t" * 201),
            ("content", "c" * 5001),
            ("author", "a" * 51),
        ],
    )
    def test_over_length_field_raises_storage_error(self, store, field, value):
        values = {"title": "title", "content": "content", "author": "author"}
        values[field] = value

        with pytest.raises(StorageError):
            store.create(**values)

        assert Post.objects.count() == 0

    def test_database_failure_raises_storage_error(self, store, mocker):
        mocker.patch.object(Post, "save", side_effect=DatabaseError("disk full"))

        with pytest.raises(StorageError) as exc_info:
            store.create(title="a", content="b", author="c")

        assert isinstance(exc_info.value.cause, DatabaseError)


@pytest.mark.django_db
class TestLookups:
    def test_get_by_id(self, store, make_post):
        post = make_post(title="Hello")

        assert store.get_by_id(post.id).title == "Hello"

    def test_get_by_id_missing_raises_not_found(self, store):
        with pytest.raises(PostNotFound) as exc_info:
            store.get_by_id(999999)

        assert exc_info.value.post_id == 999999

    def test_count_by_author(self, store, make_post):
        make_post(author="alice")
        make_post(author="alice")
        make_post(author="bob")

        assert store.count_by_author("alice") == 2
        assert store.count_by_author("nobody") == 0
        assert store.count() == 3


@pytest.mark.django_db
class TestListing:
    def test_list_all_newest_first(self, store, make_post):
        first = make_post()
        second = make_post()
        third = make_post()

        items, total = store.list_all(0, 10)

        assert total == 3
        assert [p.id for p in items] == [third.id, second.id, first.id]

    def test_list_all_pages(self, store, make_post):
        posts = [make_post() for _ in range(5)]
        newest_first = [p.id for p in reversed(posts)]

        page0, total0 = store.list_all(0, 2)
        page2, total2 = store.list_all(2, 2)

        assert [p.id for p in page0] == newest_first[:2]
        assert [p.id for p in page2] == newest_first[4:]
        assert total0 == total2 == 5

    def test_out_of_range_page_is_empty_with_total(self, store, make_post):
        make_post()
        make_post()

        items, total = store.list_all(5, 10)

        assert items == []
        assert total == 2

    def test_list_by_author_filters_exactly(self, store, make_post):
        mine = make_post(author="alice")
        make_post(author="bob")
        make_post(author="alice2")

        items, total = store.list_by_author("alice", 0, 10)

        assert total == 1
        assert [p.id for p in items] == [mine.id]

    def test_list_created_between(self, store, make_post):
        now = timezone.now()
        old = make_post()
        recent = make_post()
        Post.objects.filter(pk=old.pk).update(created_at=now - timedelta(days=10))
        Post.objects.filter(pk=recent.pk).update(created_at=now - timedelta(days=1))

        items = store.list_created_between(now - timedelta(days=2), now)

        assert [p.id for p in items] == [recent.id]


@pytest.mark.django_db
class TestSearch:
    def test_keyword_matches_title_or_content_ignoring_case(self, store, make_post):
        by_title = make_post(title="Hello World", content="nothing here")
        by_content = make_post(title="Other", content="say HELLO to everyone")
        make_post(title="Unrelated", content="nothing")

        items, total = store.search_by_keyword("hello", 0, 10)

        assert total == 2
        assert {p.id for p in items} == {by_title.id, by_content.id}

    def test_title_search_ignores_content(self, store, make_post):
        by_title = make_post(title="Hello World", content="nothing")
        make_post(title="Other", content="hello")

        items, total = store.search_by_title("HELLO", 0, 10)

        assert total == 1
        assert items[0].id == by_title.id


@pytest.mark.django_db
class TestViewCount:
    def test_top_by_view_count_orders_descending(self, store, make_post):
        for views in [5, 1, 9, 3]:
            make_post(view_count=views)

        items = store.top_by_view_count()

        assert [p.view_count for p in items] == [9, 5, 3, 1]

    def test_top_by_view_count_ties_go_to_newest(self, store, make_post):
        older = make_post(view_count=4)
        newer = make_post(view_count=4)

        items = store.top_by_view_count()

        assert [p.id for p in items] == [newer.id, older.id]

    def test_top_by_view_count_limit(self, store, make_post):
        for views in range(12):
            make_post(view_count=views)

        assert len(store.top_by_view_count()) == 10
        assert len(store.top_by_view_count(limit=3)) == 3

    def test_increment_adds_one_and_keeps_updated_at(self, store, make_post):
        post = make_post()
        updated_at = post.updated_at

        store.increment_view_count(post.id)
        store.increment_view_count(post.id)

        post.refresh_from_db()
        assert post.view_count == 2
        assert post.updated_at == updated_at

    def test_increment_is_a_single_database_side_update(self, store, make_post):
        post = make_post(view_count=7)

        with CaptureQueriesContext(connection) as ctx:
            stored = store.increment_view_count(post.id)

        statements = [q["sql"] for q in ctx.captured_queries]
        updates = [sql for sql in statements if sql.startswith("UPDATE")]
        assert len(updates) == 1
        assert '"view_count" + 1' in updates[0]
        # nothing is read before the counter is written
        before_update = statements[: statements.index(updates[0])]
        assert not [sql for sql in before_update if sql.startswith("SELECT")]
        assert stored == 8

    def test_increment_returns_stored_count(self, store, make_post):
        post = make_post(view_count=2)
        Post.objects.filter(pk=post.id).update(view_count=10)

        assert store.increment_view_count(post.id) == 11

    def test_increment_missing_post_raises_not_found(self, store):
        with pytest.raises(PostNotFound):
            store.increment_view_count(424242)
