"""Accounts models: user profile and roles.

Defines a `Profile` associated one-to-one with Django's `User`. The
profile carries the authorisation role plus the personal and academic
fields consumed by ERP pages. Profiles are created explicitly by the
add-student / add-teacher flows; a user without a profile row is
"authenticated but unauthorised" and is never routed into the ERP.
"""
from __future__ import annotations

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models


class Role(models.TextChoices):
    """The four mutually exclusive authorisation tags."""

    SUPER_ADMIN = "SUPER_ADMIN", "Super Admin"
    ADMIN = "ADMIN", "Admin"
    TEACHER = "TEACHER", "Teacher"
    STUDENT = "STUDENT", "Student"

    @property
    def slug(self) -> str:
        """URL form of the role: lower-case, hyphen separated."""
        return self.value.lower().replace("_", "-")

    @classmethod
    def from_slug(cls, slug: str) -> "Role | None":
        for role in cls:
            if role.slug == slug:
                return role
        return None


# Route permission groups
SUPER_ADMIN_ONLY = (Role.SUPER_ADMIN,)
ADMINS = (Role.ADMIN, Role.SUPER_ADMIN)
STAFF = (Role.TEACHER, Role.ADMIN, Role.SUPER_ADMIN)
EVERYONE = (Role.STUDENT, Role.TEACHER, Role.ADMIN, Role.SUPER_ADMIN)

# Who may open each role's dashboard and profile page
HOME_ACCESS = {
    Role.SUPER_ADMIN: SUPER_ADMIN_ONLY,
    Role.ADMIN: ADMINS,
    Role.TEACHER: STAFF,
    Role.STUDENT: EVERYONE,
}


class Year(models.TextChoices):
    FIRST = "1", "1st Year"
    SECOND = "2", "2nd Year"
    THIRD = "3", "3rd Year"


class Profile(models.Model):
    """Profile linked to a Django auth user.

    - `role`: authorisation tag, read by the session resolver
    - staff fields (`employee_id`, `designation`, ...) and student fields
      (`roll_number`, `year`, school scores, ...) are optional at the
      model level; the add forms enforce what each role requires
    """

    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="profile")
    role = models.CharField(max_length=16, choices=Role.choices, default=Role.STUDENT, db_index=True)

    first_name = models.CharField(max_length=100, blank=True)
    last_name = models.CharField(max_length=100, blank=True)
    employee_id = models.CharField(max_length=50, blank=True, null=True, unique=True)
    roll_number = models.CharField(max_length=50, blank=True, null=True, unique=True)
    department = models.ForeignKey(
        "academics.Department", on_delete=models.SET_NULL, null=True, blank=True, related_name="members"
    )
    year = models.CharField(max_length=2, choices=Year.choices, blank=True)
    designation = models.CharField(max_length=100, blank=True)
    avatar_url = models.URLField(blank=True)

    phone_number = models.CharField(max_length=20, blank=True)
    parent_phone_number = models.CharField(max_length=20, blank=True)
    house_no = models.CharField(max_length=50, blank=True)
    street_name = models.CharField(max_length=200, blank=True)
    city_name = models.CharField(max_length=100, blank=True)
    district_name = models.CharField(max_length=100, blank=True)
    state_name = models.CharField(max_length=100, blank=True)
    country_name = models.CharField(max_length=100, blank=True)

    tenth_school_name = models.CharField(max_length=200, blank=True)
    tenth_mark_score = models.PositiveSmallIntegerField(
        null=True, blank=True, validators=[MinValueValidator(0), MaxValueValidator(100)]
    )
    twelfth_school_name = models.CharField(max_length=200, blank=True)
    twelfth_mark_score = models.PositiveSmallIntegerField(
        null=True, blank=True, validators=[MinValueValidator(0), MaxValueValidator(100)]
    )

    highest_degree = models.CharField(max_length=100, blank=True)
    years_of_experience = models.PositiveSmallIntegerField(null=True, blank=True)
    specialization = models.CharField(max_length=200, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["role", "first_name"]

    def __str__(self) -> str:  # pragma: no cover (string repr convenience)
        return f"Profile<{self.user.username}:{self.role}>"

    @property
    def display_name(self) -> str:
        name = f"{self.first_name} {self.last_name}".strip()
        return name or self.user.get_username()


def class_roster(department, year):
    """Students of one department and year, ordered by roll number."""
    return (
        Profile.objects.filter(role=Role.STUDENT, department=department, year=year)
        .select_related("user")
        .order_by("roll_number")
    )
