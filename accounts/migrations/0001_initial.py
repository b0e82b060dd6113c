from django.db import migrations, models
import django.core.validators
import django.db.models.deletion
from django.conf import settings


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ("academics", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Profile",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("role", models.CharField(choices=[("SUPER_ADMIN", "Super Admin"), ("ADMIN", "Admin"), ("TEACHER", "Teacher"), ("STUDENT", "Student")], db_index=True, default="STUDENT", max_length=16)),
                ("first_name", models.CharField(blank=True, max_length=100)),
                ("last_name", models.CharField(blank=True, max_length=100)),
                ("employee_id", models.CharField(blank=True, max_length=50, null=True, unique=True)),
                ("roll_number", models.CharField(blank=True, max_length=50, null=True, unique=True)),
                ("year", models.CharField(blank=True, choices=[("1", "1st Year"), ("2", "2nd Year"), ("3", "3rd Year")], max_length=2)),
                ("designation", models.CharField(blank=True, max_length=100)),
                ("avatar_url", models.URLField(blank=True)),
                ("phone_number", models.CharField(blank=True, max_length=20)),
                ("parent_phone_number", models.CharField(blank=True, max_length=20)),
                ("house_no", models.CharField(blank=True, max_length=50)),
                ("street_name", models.CharField(blank=True, max_length=200)),
                ("city_name", models.CharField(blank=True, max_length=100)),
                ("district_name", models.CharField(blank=True, max_length=100)),
                ("state_name", models.CharField(blank=True, max_length=100)),
                ("country_name", models.CharField(blank=True, max_length=100)),
                ("tenth_school_name", models.CharField(blank=True, max_length=200)),
                ("tenth_mark_score", models.PositiveSmallIntegerField(blank=True, null=True, validators=[django.core.validators.MinValueValidator(0), django.core.validators.MaxValueValidator(100)])),
                ("twelfth_school_name", models.CharField(blank=True, max_length=200)),
                ("twelfth_mark_score", models.PositiveSmallIntegerField(blank=True, null=True, validators=[django.core.validators.MinValueValidator(0), django.core.validators.MaxValueValidator(100)])),
                ("highest_degree", models.CharField(blank=True, max_length=100)),
                ("years_of_experience", models.PositiveSmallIntegerField(blank=True, null=True)),
                ("specialization", models.CharField(blank=True, max_length=200)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("department", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="members", to="academics.department")),
                ("user", models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name="profile", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ["role", "first_name"],
            },
        ),
    ]
