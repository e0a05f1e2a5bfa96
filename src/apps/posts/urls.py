"""URL configuration for the posts app."""

from django.urls import path

from .views import (
    AuthorStatsView,
    PopularPostsView,
    PostDateRangeView,
    PostDetailView,
    PostListCreateView,
    PostsByAuthorView,
    PostSearchView,
)

app_name = "posts"

urlpatterns = [
    path("api/posts/", PostListCreateView.as_view(), name="post-list"),
    path("api/posts/popular/", PopularPostsView.as_view(), name="post-popular"),
    path("api/posts/search/", PostSearchView.as_view(), name="post-search"),
    path("api/posts/range/", PostDateRangeView.as_view(), name="post-range"),
    path(
        "api/posts/author/<str:author>/",
        PostsByAuthorView.as_view(),
        name="post-by-author",
    ),
    path("api/posts/<int:post_id>/", PostDetailView.as_view(), name="post-detail"),
    path(
        "api/authors/<str:author>/stats/",
        AuthorStatsView.as_view(),
        name="author-stats",
    ),
]
