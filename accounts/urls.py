from django.urls import path

from .views import (
    RoleLoginView,
    add_student,
    add_teacher,
    delete_user,
    edit_user,
    manage_users,
    profile_admin,
    profile_student,
    profile_super_admin,
    profile_teacher,
    sign_out,
)

app_name = "accounts"

urlpatterns = [
    path("auth/logout", sign_out, name="logout"),
    path("auth/<slug:slug>", RoleLoginView.as_view(), name="login"),
    path("profile/super-admin", profile_super_admin, name="profile-super-admin"),
    path("profile/admin", profile_admin, name="profile-admin"),
    path("profile/teacher", profile_teacher, name="profile-teacher"),
    path("profile/student", profile_student, name="profile-student"),
    path("erp/manage-users", manage_users, name="manage-users"),
    path("erp/edit-user/<int:user_id>", edit_user, name="edit-user"),
    path("erp/delete-user/<int:user_id>", delete_user, name="delete-user"),
    path("erp/add-student", add_student, name="add-student"),
    path("erp/add-teacher", add_teacher, name="add-teacher"),
]
