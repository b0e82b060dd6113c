"""Sidebar and dashboard link configuration.

Links are only shown to a role the linked view permits; the permitted
roles are read off the view itself (`role_required` records them), so
navigation can never advertise a page that would bounce its viewer.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache

from django.urls import Resolver404, resolve

from accounts.models import Role


@dataclass(frozen=True)
class Link:
    name: str
    href: str
    outline: bool = False


@dataclass(frozen=True)
class Section:
    title: str
    links: tuple[Link, ...] = ()
    quick_start: bool = False


@dataclass(frozen=True)
class Dashboard:
    title: str
    sections: tuple[Section, ...] = field(default_factory=tuple)


SIDEBAR: dict[Role, tuple[Link, ...]] = {
    Role.SUPER_ADMIN: (
        Link("Dashboard", "/dashboard/super-admin"),
        Link("My Profile", "/profile/super-admin"),
        Link("Manage Users", "/erp/manage-users"),
        Link("Add Teacher", "/erp/add-teacher"),
        Link("Add Student", "/erp/add-student"),
        Link("Manage Departments", "/erp/manage-departments"),
        Link("Manage Courses", "/erp/manage-courses"),
        Link("Fees Records", "/erp/fees-records"),
        Link("Approve OD Requests", "/erp/od/approve"),
    ),
    Role.ADMIN: (
        Link("Dashboard", "/dashboard/admin"),
        Link("My Profile", "/profile/admin"),
        Link("Add Teacher", "/erp/add-teacher"),
        Link("Add Student", "/erp/add-student"),
        Link("Mark Attendance", "/erp/attendance/mark"),
        Link("View All Attendance", "/erp/attendance/all"),
        Link("View All Marks", "/erp/marks/all"),
        Link("Update Fee Status", "/erp/fees/admin"),
        Link("Approve OD Requests", "/erp/od/approve"),
    ),
    Role.TEACHER: (
        Link("Dashboard", "/dashboard/teacher"),
        Link("My Profile", "/profile/teacher"),
        Link("Mark Attendance", "/erp/attendance/mark"),
        Link("Upload Marks", "/erp/marks/upload"),
        Link("View My Classes", "/erp/teacher/classes"),
        Link("View Student Profiles", "/erp/teacher/student-profiles"),
        Link("Approve OD Requests", "/erp/od/approve"),
        Link("Class Chat", "/erp/chat/teacher"),
    ),
    Role.STUDENT: (
        Link("Dashboard", "/dashboard/student"),
        Link("My Profile", "/profile/student"),
        Link("View Attendance", "/erp/attendance/student"),
        Link("View Marks", "/erp/marks/student"),
        Link("View Fee Status", "/erp/fees/student"),
        Link("Request OD", "/erp/od/request"),
        Link("Class Chat", "/erp/chat/student"),
    ),
}

DASHBOARDS: dict[Role, Dashboard] = {
    Role.SUPER_ADMIN: Dashboard(
        "Super Admin Dashboard",
        (
            Section("Quick Start", quick_start=True),
            Section("User Management", (
                Link("My Profile", "/profile/super-admin"),
                Link("Add New Teacher", "/erp/add-teacher"),
                Link("Add New Student", "/erp/add-student"),
                Link("View & Manage All Users", "/erp/manage-users", outline=True),
            )),
            Section("Academic & Financial Configuration", (
                Link("Manage Departments", "/erp/manage-departments"),
                Link("Manage Courses", "/erp/manage-courses"),
                Link("Manage All Fees", "/erp/fees-records", outline=True),
                Link("Approve OD Requests", "/erp/od/approve", outline=True),
            )),
        ),
    ),
    Role.ADMIN: Dashboard(
        "Admin Dashboard",
        (
            Section("Personal", (Link("My Profile", "/profile/admin"),)),
            Section("Administrative Tasks", (
                Link("Add Teacher", "/erp/add-teacher"),
                Link("Add Student", "/erp/add-student"),
                Link("Mark Attendance (Admin override)", "/erp/attendance/mark", outline=True),
                Link("Update Fee Status", "/erp/fees/admin", outline=True),
            )),
            Section("Overview & Approvals", (
                Link("View All Attendance", "/erp/attendance/all"),
                Link("View All Marks", "/erp/marks/all"),
                Link("Approve OD Requests", "/erp/od/approve", outline=True),
            )),
        ),
    ),
    Role.TEACHER: Dashboard(
        "Teacher Dashboard",
        (
            Section("Personal", (Link("My Profile", "/profile/teacher"),)),
            Section("Academic Management", (
                Link("Mark Attendance", "/erp/attendance/mark"),
                Link("Upload Marks", "/erp/marks/upload"),
                Link("Class Chat", "/erp/chat/teacher", outline=True),
                Link("Approve OD Requests", "/erp/od/approve", outline=True),
            )),
            Section("Class & Student Information", (
                Link("View My Classes", "/erp/teacher/classes"),
                Link("View Student Profiles", "/erp/teacher/student-profiles", outline=True),
            )),
        ),
    ),
    Role.STUDENT: Dashboard(
        "Student Dashboard",
        (
            Section("Personal", (Link("My Profile", "/profile/student"),)),
            Section("Student Services", (
                Link("View Attendance", "/erp/attendance/student"),
                Link("View Marks", "/erp/marks/student"),
                Link("View Fee Status", "/erp/fees/student", outline=True),
                Link("Class Chat", "/erp/chat/student", outline=True),
                Link("Request OD", "/erp/od/request", outline=True),
            )),
        ),
    ),
}


@lru_cache(maxsize=None)
def permitted_roles(href: str) -> frozenset:
    """Roles the view behind `href` admits; empty for unknown or unguarded paths."""
    try:
        match = resolve(href)
    except Resolver404:
        return frozenset()
    return getattr(match.func, "permitted_roles", frozenset())


def visible(links, role: Role | None) -> list[Link]:
    if role is None:
        return []
    return [link for link in links if role in permitted_roles(link.href)]


def sidebar_for(role: Role | None) -> list[Link]:
    if role is None:
        return []
    return visible(SIDEBAR.get(role, ()), role)


def dashboard_for(role: Role) -> dict:
    """Dashboard title plus its sections with links the role may follow."""
    board = DASHBOARDS[role]
    sections = []
    for section in board.sections:
        links = visible(section.links, role)
        if links or section.quick_start:
            sections.append({"title": section.title, "links": links, "quick_start": section.quick_start})
    return {"title": board.title, "sections": sections}
