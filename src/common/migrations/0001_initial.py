import uuid

import django.db.models.deletion
import simple_history.models
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="EmailLog",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True, db_index=True)),
                ("to", models.EmailField(db_index=True, max_length=254)),
                ("subject", models.TextField(db_index=True)),
                ("sent_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("test_only", models.BooleanField(db_index=True, default=False)),
                ("compressed_body", models.BinaryField(blank=True, null=True)),
                ("compressed_html", models.BinaryField(blank=True, null=True)),
            ],
            options={
                "indexes": [
                    models.Index(fields=["to", "sent_at", "test_only"], name="ix_emaillog_to_sentat_testonly")
                ],
            },
        ),
        migrations.CreateModel(
            name="SiteSettings",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "live_emails",
                    models.BooleanField(
                        default=False,
                        help_text="When off, every outgoing email is rerouted to the internal catch-all address.",
                    ),
                ),
                (
                    "frontend_base_url",
                    models.URLField(
                        default=settings.FRONTEND_BASE_URL,
                        help_text="Base URL of the web frontend. "
                        "Ticket QR codes point to <base>/my-tickets/<ticket code>.",
                    ),
                ),
                (
                    "internal_catchall_email",
                    models.EmailField(
                        default=settings.INTERNAL_CATCHALL_EMAIL,
                        help_text="Receives rerouted mail while live emails are off.",
                        max_length=254,
                        verbose_name="Internal Catchall Email",
                    ),
                ),
            ],
            options={
                "verbose_name": "Site Settings",
                "verbose_name_plural": "Site Settings",
            },
        ),
        migrations.CreateModel(
            name="HistoricalSiteSettings",
            fields=[
                ("id", models.BigIntegerField(auto_created=True, blank=True, db_index=True, verbose_name="ID")),
                ("created_at", models.DateTimeField(blank=True, editable=False)),
                ("updated_at", models.DateTimeField(blank=True, editable=False)),
                (
                    "live_emails",
                    models.BooleanField(
                        default=False,
                        help_text="When off, every outgoing email is rerouted to the internal catch-all address.",
                    ),
                ),
                (
                    "frontend_base_url",
                    models.URLField(
                        default=settings.FRONTEND_BASE_URL,
                        help_text="Base URL of the web frontend. "
                        "Ticket QR codes point to <base>/my-tickets/<ticket code>.",
                    ),
                ),
                (
                    "internal_catchall_email",
                    models.EmailField(
                        default=settings.INTERNAL_CATCHALL_EMAIL,
                        help_text="Receives rerouted mail while live emails are off.",
                        max_length=254,
                        verbose_name="Internal Catchall Email",
                    ),
                ),
                ("history_id", models.AutoField(primary_key=True, serialize=False)),
                ("history_date", models.DateTimeField(db_index=True)),
                ("history_change_reason", models.CharField(max_length=100, null=True)),
                (
                    "history_type",
                    models.CharField(choices=[("+", "Created"), ("~", "Changed"), ("-", "Deleted")], max_length=1),
                ),
                (
                    "history_user",
                    models.ForeignKey(
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "historical Site Settings",
                "verbose_name_plural": "historical Site Settings",
                "ordering": ("-history_date", "-history_id"),
                "get_latest_by": ("history_date", "history_id"),
            },
            bases=(simple_history.models.HistoricalChanges, models.Model),
        ),
    ]
