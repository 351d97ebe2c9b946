"""
Post views, public and admin.
"""

from django.http import FileResponse
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.permissions import AllowAny

from apps.core.exceptions import validation_error_response
from apps.core.permissions import IsAdmin, IsAuthenticatedUser
from apps.core.utils.pagination import paginate, parse_pagination
from .serializers import (
    AdminPostQuerySerializer,
    PostCreateSerializer,
    PostQuerySerializer,
    PostSerializer,
    PostStatusSerializer,
    PostUpdateSerializer,
)
from .services import post_service


def _serialize(viewer, posts, many=True):
    items = posts if many else [posts]
    context = post_service.serializer_context(viewer, items)
    return PostSerializer(posts, many=many, context=context).data


class PostListView(APIView):
    """
    GET  /api/posts
    POST /api/posts (multipart)
    """

    def get_permissions(self):
        if self.request.method == 'POST':
            return [IsAuthenticatedUser()]
        return [AllowAny()]

    def get(self, request):
        query = PostQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return validation_error_response(query.errors)

        page, limit = parse_pagination(request.query_params)
        queryset = post_service.list_posts(request.user, query.validated_data)
        posts, meta = paginate(queryset, page, limit)
        return Response({'data': _serialize(request.user, posts), 'meta': meta})

    def post(self, request):
        serializer = PostCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        post = post_service.create_post(request.user, serializer.validated_data)
        return Response(_serialize(request.user, post, many=False), status=status.HTTP_201_CREATED)


class PostDetailView(APIView):
    """
    GET    /api/posts/:id
    PATCH  /api/posts/:id
    DELETE /api/posts/:id
    """

    def get_permissions(self):
        if self.request.method == 'GET':
            return [AllowAny()]
        return [IsAuthenticatedUser()]

    def get(self, request, post_id):
        post = post_service.view_post(post_id)
        return Response(_serialize(request.user, post, many=False))

    def patch(self, request, post_id):
        serializer = PostUpdateSerializer(data=request.data, partial=True)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        post = post_service.update_post(request.user, post_id, serializer.validated_data)
        return Response(_serialize(request.user, post, many=False))

    def delete(self, request, post_id):
        post_service.delete_post(request.user, post_id)
        return Response({'success': True, 'message': '作品已删除'})


class PostLikeView(APIView):
    """
    POST /api/posts/:id/like
    """
    permission_classes = [IsAuthenticatedUser]

    def post(self, request, post_id):
        liked = post_service.toggle_like(request.user, post_id)
        return Response({
            'success': True,
            'message': '点赞成功' if liked else '取消点赞成功',
            'liked': liked,
        })


class PostFavoriteView(APIView):
    """
    POST /api/posts/:id/favorite
    """
    permission_classes = [IsAuthenticatedUser]

    def post(self, request, post_id):
        favorited = post_service.toggle_favorite(request.user, post_id)
        return Response({
            'success': True,
            'message': '收藏成功' if favorited else '取消收藏成功',
            'favorited': favorited,
        })


class PostDownloadView(APIView):
    """
    GET /api/posts/:id/download
    """
    permission_classes = [IsAuthenticatedUser]

    def get(self, request, post_id):
        post, stream = post_service.open_download(request.user, post_id)
        filename = post.original_filename or post.file_url.rsplit('/', 1)[-1]
        return FileResponse(
            stream,
            as_attachment=True,
            filename=filename,
            content_type=post.mime_type or 'application/octet-stream',
        )


class AdminPostListView(APIView):
    """
    GET /api/admin/posts
    """
    permission_classes = [IsAdmin]

    def get(self, request):
        query = AdminPostQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return validation_error_response(query.errors)

        page, limit = parse_pagination(request.query_params)
        posts, meta = paginate(post_service.admin_list_posts(query.validated_data), page, limit)
        return Response({'data': _serialize(request.user, posts), 'meta': meta})


class AdminPostDetailView(APIView):
    """
    GET    /api/admin/posts/:id
    DELETE /api/admin/posts/:id
    """
    permission_classes = [IsAdmin]

    def get(self, request, post_id):
        return Response(_serialize(request.user, post_service.get_post(post_id), many=False))

    def delete(self, request, post_id):
        post_service.hard_delete(post_id)
        return Response({'success': True, 'message': '作品已永久删除'})


class AdminPostStatusView(APIView):
    """
    PATCH /api/admin/posts/:id/status
    """
    permission_classes = [IsAdmin]

    def patch(self, request, post_id):
        serializer = PostStatusSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        post = post_service.set_status(post_id, serializer.validated_data['status'])
        return Response(_serialize(request.user, post, many=False))
