"""REST API v1 viewsets and the session endpoint."""
from __future__ import annotations

import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db.models import ProtectedError
from django.shortcuts import get_object_or_404
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from accounts.models import ADMINS, EVERYONE, STAFF, SUPER_ADMIN_ONLY, Profile, Role
from accounts.session import resolve_session
from academics.models import Course, Department
from attendance.models import AttendanceRecord
from fees.models import Fee, record_payment
from marks.models import Mark
from messaging.models import ChatMessage
from onduty.models import ODRequest, ODStatus
from .permissions import HasRole, request_context
from .serializers import (
    AttendanceRecordSerializer,
    ChatMessageSerializer,
    CourseSerializer,
    DepartmentSerializer,
    FeeSerializer,
    MarkSerializer,
    ODRequestSerializer,
    PaymentSerializer,
    ProfileSerializer,
)

logger = logging.getLogger(__name__)


class RoleScopedMixin:
    """Students only ever see rows whose `student` is themselves."""

    permission_classes = [HasRole]
    read_roles = EVERYONE

    def scope(self, qs):
        if request_context(self.request).role is Role.STUDENT:
            return qs.filter(student=self.request.user)
        return qs


class DepartmentViewSet(viewsets.ModelViewSet):
    queryset = Department.objects.all()
    serializer_class = DepartmentSerializer
    permission_classes = [HasRole]
    read_roles = EVERYONE
    write_roles = SUPER_ADMIN_ONLY
    search_fields = ["name", "code"]
    ordering_fields = ["name", "code", "created_at"]

    def destroy(self, request, *args, **kwargs):
        try:
            return super().destroy(request, *args, **kwargs)
        except ProtectedError:
            return Response(
                {"detail": "Cannot delete a department that still has courses."},
                status=status.HTTP_409_CONFLICT,
            )


class CourseViewSet(viewsets.ModelViewSet):
    queryset = Course.objects.select_related("department").all()
    serializer_class = CourseSerializer
    permission_classes = [HasRole]
    read_roles = EVERYONE
    write_roles = SUPER_ADMIN_ONLY
    filterset_fields = ["department"]
    search_fields = ["name", "code", "department__name"]
    ordering_fields = ["name", "code", "credits", "created_at"]


class ProfileViewSet(viewsets.ReadOnlyModelViewSet):
    queryset = Profile.objects.select_related("user", "department").all()
    serializer_class = ProfileSerializer
    permission_classes = [HasRole]
    read_roles = STAFF
    filterset_fields = ["role", "department", "year"]
    search_fields = ["first_name", "last_name", "roll_number", "employee_id", "user__email"]
    ordering_fields = ["roll_number", "first_name", "role"]


class AttendanceRecordViewSet(RoleScopedMixin, viewsets.ModelViewSet):
    serializer_class = AttendanceRecordSerializer
    write_roles = STAFF
    filterset_fields = ["course", "date", "status", "student"]
    ordering_fields = ["date", "created_at"]

    def get_queryset(self):
        return self.scope(AttendanceRecord.objects.select_related("course").order_by("-date", "-created_at"))


class MarkViewSet(RoleScopedMixin, viewsets.ModelViewSet):
    serializer_class = MarkSerializer
    write_roles = STAFF
    filterset_fields = ["course", "student", "grade"]
    ordering_fields = ["marks", "created_at"]

    def get_queryset(self):
        return self.scope(Mark.objects.select_related("course").order_by("course__name"))


class FeeViewSet(RoleScopedMixin, mixins.CreateModelMixin, viewsets.ReadOnlyModelViewSet):
    serializer_class = FeeSerializer
    write_roles = SUPER_ADMIN_ONLY
    action_roles = {"pay": ADMINS}
    filterset_fields = ["status", "student"]
    ordering_fields = ["due_date", "amount"]

    def get_queryset(self):
        return self.scope(Fee.objects.order_by("due_date"))

    @action(detail=True, methods=["post"])
    def pay(self, request, pk=None):
        """Record a payment against the outstanding amount."""
        fee = self.get_object()
        payload = PaymentSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        try:
            record_payment(fee, payload.validated_data["amount"])
        except DjangoValidationError as exc:
            raise ValidationError({"amount": exc.messages})
        logger.info("Payment recorded on fee %s via API by %s", fee.pk, request.user.pk)
        return Response(FeeSerializer(fee).data)


class ODRequestViewSet(RoleScopedMixin, mixins.CreateModelMixin, viewsets.ReadOnlyModelViewSet):
    serializer_class = ODRequestSerializer
    write_roles = EVERYONE
    action_roles = {"approve": STAFF, "reject": STAFF}
    filterset_fields = ["status", "request_date"]
    ordering_fields = ["request_date", "created_at"]

    def get_queryset(self):
        return self.scope(ODRequest.objects.order_by("request_date", "created_at"))

    def perform_create(self, serializer):
        serializer.save(student=self.request.user)

    def _decide(self, pk, new_status: str) -> Response:
        od = get_object_or_404(ODRequest, pk=pk)
        if not od.is_pending:
            return Response(
                {"detail": f"This request has already been {od.status.lower()}."},
                status=status.HTTP_409_CONFLICT,
            )
        od.status = new_status
        od.save(update_fields=["status"])
        return Response(ODRequestSerializer(od).data)

    @action(detail=True, methods=["post"])
    def approve(self, request, pk=None):
        return self._decide(pk, ODStatus.APPROVED)

    @action(detail=True, methods=["post"])
    def reject(self, request, pk=None):
        return self._decide(pk, ODStatus.REJECTED)


class ChatMessageViewSet(mixins.CreateModelMixin, mixins.ListModelMixin, viewsets.GenericViewSet):
    serializer_class = ChatMessageSerializer
    permission_classes = [HasRole]
    read_roles = EVERYONE
    write_roles = EVERYONE
    filterset_fields = ["course"]
    ordering_fields = ["created_at"]

    def get_queryset(self):
        return ChatMessage.objects.select_related("sender__profile").order_by("created_at")

    def perform_create(self, serializer):
        serializer.save(sender=self.request.user)


@api_view(["GET"])
@permission_classes([AllowAny])
def session(request):
    """The caller's resolved session: kind, role and landing path."""
    return Response(resolve_session(request.user).as_dict())
