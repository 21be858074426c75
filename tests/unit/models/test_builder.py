"""Tests for SearchBuilder, Searchable and Page."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from indexsync.models.builder import SearchBuilder
from indexsync.models.pagination import Page
from indexsync.models.searchable import SOFT_DELETE_FIELD, PendingRemoval, Searchable
from tests.records import Post, TrashablePost


class TestSearchBuilder:
    def test_defaults(self) -> None:
        builder = SearchBuilder(model=Post)
        assert builder.query == ""
        assert builder.wheres == {}
        assert builder.where_ins == {}
        assert builder.limit is None
        assert builder.callback is None

    def test_chaining(self) -> None:
        builder = (
            SearchBuilder(model=Post, query="solar")
            .where("author_id", 1)
            .where_in("category_id", (2, 3))
            .where_not_in("status", {9})
            .within("posts_by_date")
            .take(25)
            .with_options({"typoTolerance": False})
        )
        assert builder.wheres == {"author_id": 1}
        assert builder.where_ins == {"category_id": [2, 3]}
        assert builder.where_not_ins == {"status": [9]}
        assert builder.index == "posts_by_date"
        assert builder.limit == 25
        assert builder.options == {"typoTolerance": False}

    def test_invalid_limit(self) -> None:
        with pytest.raises(ValidationError):
            SearchBuilder(model=Post, limit=0)

    def test_query_using(self) -> None:
        def hook(query):
            return query

        builder = SearchBuilder(model=Post).query_using(hook)
        assert builder.query_callback is hook

    def test_for_model_excludes_trashed(self) -> None:
        builder = SearchBuilder.for_model(TrashablePost, "q", soft_delete=True)
        assert builder.wheres == {SOFT_DELETE_FIELD: 0}

    def test_for_model_without_soft_delete_support(self) -> None:
        assert SearchBuilder.for_model(Post, "q", soft_delete=True).wheres == {}
        assert SearchBuilder.for_model(TrashablePost, "q").wheres == {}

    def test_with_and_only_trashed(self) -> None:
        builder = SearchBuilder.for_model(TrashablePost, soft_delete=True)
        assert builder.only_trashed().wheres == {SOFT_DELETE_FIELD: 1}
        assert builder.with_trashed().wheres == {}


class TestSearchable:
    def test_index_names(self) -> None:
        assert Post.searchable_as() == "posts"
        assert Post.indexable_as() == "posts"
        assert TrashablePost.indexable_as() == "trashable_posts"

    def test_default_index_name_is_class_name(self) -> None:
        class Article(Post):
            search_index = None

        assert Article.searchable_as() == "article"

    def test_keys(self) -> None:
        post = Post(11, "t")
        assert post.get_search_key() == 11
        assert Post.get_search_key_name() == "id"

    def test_metadata_is_per_instance(self) -> None:
        first, second = Post(1), Post(2)
        first.with_search_metadata("_rankingInfo", {"nbTypos": 0})
        assert first.search_metadata() == {"_rankingInfo": {"nbTypos": 0}}
        assert second.search_metadata() == {}

    def test_push_soft_delete_metadata(self) -> None:
        assert TrashablePost(1, trashed=True).push_soft_delete_metadata().search_metadata() == {SOFT_DELETE_FIELD: 1}
        assert TrashablePost(2).push_soft_delete_metadata().search_metadata() == {SOFT_DELETE_FIELD: 0}

    async def test_default_stream_delegates_to_eager_fetch(self) -> None:
        class Note(Searchable):
            def __init__(self, id: int) -> None:
                self.id = id

            def to_searchable_dict(self) -> dict:
                return {"id": self.id}

            @classmethod
            async def get_search_models_by_ids(cls, builder, ids) -> list:
                return [cls(i) for i in ids]

        streamed = [n async for n in Note.query_search_models_by_ids(SearchBuilder(model=Note), [3, 1])]
        assert [n.id for n in streamed] == [3, 1]


class TestPendingRemoval:
    def test_from_records(self) -> None:
        removal = PendingRemoval.from_records([Post(3), Post(4)])
        assert removal.index_name == "posts"
        assert removal.key_name == "id"
        assert removal.keys() == [3, 4]

    def test_from_empty_records(self) -> None:
        with pytest.raises(ValueError, match="empty batch"):
            PendingRemoval.from_records([])


class TestPage:
    def test_last_page(self) -> None:
        assert Page(total=21, per_page=10).last_page == 3
        assert Page(total=0, per_page=10).last_page == 1

    def test_has_more_pages(self) -> None:
        assert Page(total=21, per_page=10, current_page=2).has_more_pages
        assert not Page(total=21, per_page=10, current_page=3).has_more_pages
