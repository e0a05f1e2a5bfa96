"""API views for posts."""

import logging
from typing import Optional

from drf_spectacular.utils import OpenApiExample, OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from .exceptions import PostNotFound, PostValidationError, StorageError
from .serializers import (
    AuthorStatsSerializer,
    DateRangeQuerySerializer,
    PagingQuerySerializer,
    PostCreatedSerializer,
    PostCreateSerializer,
    PostDetailSerializer,
    PostPageSerializer,
    PostSummarySerializer,
    SearchQuerySerializer,
)
from .services import PostService

logger = logging.getLogger(__name__)

PAGING_PARAMETERS = [
    OpenApiParameter("page", int, description="Zero-based page number", default=0),
    OpenApiParameter("size", int, description="Page length", default=10),
]


class PostAPIView(APIView):  # type: ignore[misc]
    """Base view that turns post service errors into HTTP responses."""

    # NOTE: posts are public; authentication is not part of this service
    permission_classes = [AllowAny]

    def get_service(self) -> PostService:
        return PostService()

    def handle_exception(self, exc: Exception) -> Response:
        if isinstance(exc, PostValidationError):
            return Response({"errors": exc.errors}, status=status.HTTP_400_BAD_REQUEST)

        if isinstance(exc, PostNotFound):
            return Response({"error": str(exc)}, status=status.HTTP_404_NOT_FOUND)

        if isinstance(exc, StorageError):
            logger.error(
                "Post storage failure.",
                exc_info=exc,
                extra={"path": self.request.path, "method": self.request.method},
            )
            return Response(
                {"error": "Internal server error"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return super().handle_exception(exc)

    @staticmethod
    def page_params(request: Request) -> dict[str, int]:
        serializer = PagingQuerySerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)
        return serializer.validated_data


class PostListCreateView(PostAPIView):
    """List posts newest first, or create a new post."""

    @extend_schema(
        parameters=PAGING_PARAMETERS,
        responses={200: PostPageSerializer},
        summary="List posts",
        description="Returns a page of post summaries ordered by creation time, newest first.",
        tags=["Posts"],
    )
    def get(self, request: Request, format: Optional[str] = None) -> Response:
        params = self.page_params(request)
        logger.info("Post list requested.", extra=params)

        page = self.get_service().list_posts(params["page"], params["size"])
        return Response(PostPageSerializer(page).data)

    @extend_schema(
        request=PostCreateSerializer,
        responses={201: PostCreatedSerializer},
        summary="Create a post",
        description="Creates a new post. Leading and trailing whitespace is removed from every field.",
        tags=["Posts"],
        examples=[
            OpenApiExample(
                "Create a new post",
                value={
                    "title": "My New Post Title",
                    "content": "This is the content of my new post.",
                    "author": "jane",
                },
                request_only=True,
            ),
        ],
    )
    def post(self, request: Request, format: Optional[str] = None) -> Response:
        serializer = PostCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        logger.info(
            "Post create requested.",
            extra={"author": serializer.validated_data["author"]},
        )

        post = self.get_service().create_post(**serializer.validated_data)
        body = {"id": post.id, "message": "Post created successfully.", "post": post}
        return Response(PostCreatedSerializer(body).data, status=status.HTTP_201_CREATED)


class PostDetailView(PostAPIView):
    """Fetch one post and count the view."""

    @extend_schema(
        responses={200: PostDetailSerializer},
        summary="Retrieve a post",
        description="Returns the full post and increments its view count.",
        tags=["Posts"],
    )
    def get(self, request: Request, post_id: int, format: Optional[str] = None) -> Response:
        logger.info("Post requested.", extra={"post_id": post_id})
        post = self.get_service().get_post(post_id)
        return Response(PostDetailSerializer(post).data)


class PostsByAuthorView(PostAPIView):
    @extend_schema(
        parameters=PAGING_PARAMETERS,
        responses={200: PostPageSerializer},
        summary="List posts by author",
        tags=["Posts"],
    )
    def get(self, request: Request, author: str, format: Optional[str] = None) -> Response:
        params = self.page_params(request)
        page = self.get_service().list_posts_by_author(
            author, params["page"], params["size"]
        )
        return Response(PostPageSerializer(page).data)


class PostSearchView(PostAPIView):
    """Case-insensitive keyword search over title and content, or title only."""

    @extend_schema(
        parameters=[SearchQuerySerializer],
        responses={200: PostPageSerializer},
        summary="Search posts",
        tags=["Posts"],
    )
    def get(self, request: Request, format: Optional[str] = None) -> Response:
        serializer = SearchQuerySerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)
        params = serializer.validated_data
        logger.info(
            "Post search requested.",
            extra={"keyword": params["keyword"], "field": params["field"]},
        )

        service = self.get_service()
        search = service.search_post_titles if params["field"] == "title" else service.search_posts
        page = search(params["keyword"], params["page"], params["size"])
        return Response(PostPageSerializer(page).data)


class PopularPostsView(PostAPIView):
    @extend_schema(
        responses={200: PostSummarySerializer(many=True)},
        summary="Most viewed posts",
        description="Returns the ten most viewed posts. Equal view counts are ordered newest first.",
        tags=["Posts"],
    )
    def get(self, request: Request, format: Optional[str] = None) -> Response:
        posts = self.get_service().popular_posts()
        return Response(PostSummarySerializer(posts, many=True).data)


class PostDateRangeView(PostAPIView):
    @extend_schema(
        parameters=[DateRangeQuerySerializer],
        responses={200: PostSummarySerializer(many=True)},
        summary="Posts created in a date range",
        tags=["Posts"],
    )
    def get(self, request: Request, format: Optional[str] = None) -> Response:
        serializer = DateRangeQuerySerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)

        posts = self.get_service().posts_between(**serializer.validated_data)
        return Response(PostSummarySerializer(posts, many=True).data)


class AuthorStatsView(PostAPIView):
    @extend_schema(
        responses={200: AuthorStatsSerializer},
        summary="Author statistics",
        tags=["Authors"],
    )
    def get(self, request: Request, author: str, format: Optional[str] = None) -> Response:
        total = self.get_service().author_post_count(author)
        return Response(AuthorStatsSerializer({"author": author, "total_posts": total}).data)
