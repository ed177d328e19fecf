# notifications/views.py
#
# Purpose:
# - Notification bell API.
#
#   GET  /api/notifications/?user=<id>         newest first + unread_count
#   POST /api/notifications/{id}/read/         mark one read
#   POST /api/notifications/read-all/?user=    mark every unread one read
#
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import BasePermission
from rest_framework.response import Response

from .models import Notification
from .serializers import NotificationSerializer
from .services import mark_all_read, unread_count


class IsStaffOnly(BasePermission):
    def has_permission(self, request, view):
        return bool(request.user and request.user.is_staff)


class NotificationViewSet(mixins.ListModelMixin,
                          mixins.RetrieveModelMixin,
                          mixins.DestroyModelMixin,
                          viewsets.GenericViewSet):
    queryset = Notification.objects.all().order_by("-created_at")
    serializer_class = NotificationSerializer
    permission_classes = [IsStaffOnly]

    def get_queryset(self):
        qs = super().get_queryset()
        user_id = self.request.query_params.get("user")
        if self.action == "list" and user_id:
            qs = qs.filter(user_id=user_id)
        return qs

    def list(self, request, *args, **kwargs):
        user_id = request.query_params.get("user")
        items = self.get_serializer(self.get_queryset(), many=True).data
        count = unread_count(user_id) if user_id else sum(1 for n in items if not n["read"])
        return Response({"results": items, "unread_count": count})

    @action(detail=True, methods=["post"])
    def read(self, request, pk=None):
        notification = self.get_object()
        if not notification.read:
            notification.read = True
            notification.save(update_fields=["read"])
        return Response(self.get_serializer(notification).data)

    @action(detail=False, methods=["post"], url_path="read-all")
    def read_all(self, request):
        user_id = request.query_params.get("user") or request.data.get("user")
        if not user_id:
            return Response({"detail": "Missing 'user'."}, status=status.HTTP_400_BAD_REQUEST)
        return Response({"updated": mark_all_read(user_id)})
