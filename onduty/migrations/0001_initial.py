from django.db import migrations, models
import django.db.models.deletion
from django.conf import settings

import onduty.models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="ODRequest",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("reason", models.TextField()),
                ("request_date", models.DateField()),
                ("status", models.CharField(choices=[("Pending", "Pending"), ("Approved", "Approved"), ("Rejected", "Rejected")], db_index=True, default="Pending", max_length=10)),
                ("supporting_document", models.FileField(blank=True, upload_to=onduty.models.document_path, validators=[onduty.models.validate_document])),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("student", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="od_requests", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ["request_date", "created_at"],
                "verbose_name": "OD request",
            },
        ),
    ]
