"""Serializers for REST API v1.

Ownership fields (`student` on OD requests, `sender` on chat) are
read-only and filled from the caller; grades and fee status are derived
server-side.
"""
from __future__ import annotations

from django.contrib.auth import get_user_model
from rest_framework import serializers

from accounts.models import Profile, Role
from academics.models import Course, Department
from attendance.models import AttendanceRecord
from fees.models import Fee
from marks.models import Mark
from messaging.models import ChatMessage
from onduty.models import ODRequest

User = get_user_model()


class DepartmentSerializer(serializers.ModelSerializer):
    class Meta:
        model = Department
        fields = ("id", "name", "code", "created_at")
        read_only_fields = ("created_at",)


class CourseSerializer(serializers.ModelSerializer):
    department_name = serializers.CharField(source="department.name", read_only=True)

    class Meta:
        model = Course
        fields = ("id", "name", "code", "department", "department_name", "credits", "created_at")
        read_only_fields = ("created_at",)

    def validate_credits(self, value: int) -> int:
        if value < 1:
            raise serializers.ValidationError("Credits must be at least 1.")
        return value


class ProfileSerializer(serializers.ModelSerializer):
    username = serializers.CharField(source="user.username", read_only=True)
    email = serializers.EmailField(source="user.email", read_only=True)
    department_name = serializers.CharField(source="department.name", read_only=True, default=None)

    class Meta:
        model = Profile
        fields = (
            "id", "user", "username", "email", "role", "first_name", "last_name",
            "employee_id", "roll_number", "department", "department_name", "year",
            "designation", "phone_number", "created_at",
        )
        read_only_fields = fields


def _is_student(value) -> bool:
    return Profile.objects.filter(user=value, role=Role.STUDENT).exists()


class _StudentRowSerializer(serializers.ModelSerializer):
    """Rows keyed on a student user; the user must hold a STUDENT profile."""

    def validate_student(self, value):
        if not _is_student(value):
            raise serializers.ValidationError("Not a student.")
        return value


class AttendanceRecordSerializer(_StudentRowSerializer):
    class Meta:
        model = AttendanceRecord
        fields = ("id", "student", "course", "date", "status", "reason", "created_at")
        read_only_fields = ("created_at",)

    def validate(self, attrs):
        if attrs.get("status") == "Present":
            attrs["reason"] = ""
        return attrs


class MarkSerializer(_StudentRowSerializer):
    class Meta:
        model = Mark
        fields = ("id", "student", "course", "marks", "grade", "created_at")
        read_only_fields = ("grade", "created_at")


class FeeSerializer(_StudentRowSerializer):
    class Meta:
        model = Fee
        fields = ("id", "student", "fee_type", "amount", "due_date", "status", "paid_at", "created_at")
        read_only_fields = ("status", "paid_at", "created_at")

    def validate_amount(self, value):
        if value <= 0:
            raise serializers.ValidationError("Amount must be greater than zero.")
        return value


class PaymentSerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=10, decimal_places=2)


class ODRequestSerializer(serializers.ModelSerializer):
    document_url = serializers.SerializerMethodField()

    class Meta:
        model = ODRequest
        fields = ("id", "student", "reason", "request_date", "status", "supporting_document", "document_url", "created_at")
        read_only_fields = ("student", "status", "created_at")
        extra_kwargs = {"supporting_document": {"write_only": True, "required": False}}

    def get_document_url(self, obj) -> str:
        return obj.document_url

    def validate_reason(self, value: str) -> str:
        value = (value or "").strip()
        if not value:
            raise serializers.ValidationError("Please give a reason.")
        return value


class ChatMessageSerializer(serializers.ModelSerializer):
    sender_name = serializers.SerializerMethodField()

    class Meta:
        model = ChatMessage
        fields = ("id", "course", "sender", "sender_name", "message_text", "created_at")
        read_only_fields = ("sender", "created_at")

    def get_sender_name(self, obj) -> str:
        profile = getattr(obj.sender, "profile", None)
        return profile.display_name if profile else obj.sender.get_username()

    def validate_message_text(self, value: str) -> str:
        value = (value or "").strip()
        if not value:
            raise serializers.ValidationError("Message cannot be empty.")
        return value
