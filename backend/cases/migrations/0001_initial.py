import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models

STATUS_CHOICES = [
    ("submitted", "Submitted"),
    ("assigned", "Assigned"),
    ("investigating", "Investigating"),
    ("evidence_collection", "Evidence Collection"),
    ("under_review", "Under Review"),
    ("resolved", "Resolved"),
    ("reopened", "Reopened"),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("criminals", "0001_initial"),
        ("stations", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Case",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("status", models.CharField(choices=STATUS_CHOICES, db_index=True, default="submitted", max_length=30, verbose_name="Current Status")),
                ("closed", models.BooleanField(db_index=True, default=False, verbose_name="Closed")),
                ("complain_date", models.DateField(default=django.utils.timezone.localdate, verbose_name="Complaint Date")),
                ("incident_date", models.DateField(blank=True, null=True, verbose_name="Incident Date")),
                ("incident_location", models.CharField(blank=True, default="", max_length=500, verbose_name="Incident Location")),
                ("description", models.TextField(verbose_name="Description")),
                ("version", models.PositiveIntegerField(default=0, verbose_name="Version")),
                ("criminal", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name="cases", to="criminals.criminal", verbose_name="Linked Criminal Record")),
                ("officer", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name="cases", to="stations.officer", verbose_name="Assigned Officer")),
                ("station", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="cases", to="stations.station", verbose_name="Owning Station")),
                ("victim", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="filed_cases", to=settings.AUTH_USER_MODEL, verbose_name="Complainant")),
            ],
            options={
                "verbose_name": "FIR",
                "verbose_name_plural": "FIRs",
                "ordering": ["-complain_date", "-id"],
                "indexes": [
                    models.Index(fields=["station", "status"], name="case_station_status_idx"),
                    models.Index(fields=["officer", "closed"], name="case_officer_closed_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(("closed", False), ("status", "resolved"), _connector="OR"), name="case_closed_implies_resolved"),
                ],
            },
        ),
        migrations.CreateModel(
            name="CaseStatusLog",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("action", models.CharField(choices=[("file", "Filed"), ("assign", "Officer Assigned"), ("reassign", "Officer Reassigned"), ("advance", "Status Advanced"), ("close", "Closed"), ("reopen", "Reopened"), ("link_criminal", "Criminal Linked")], max_length=20, verbose_name="Action")),
                ("from_status", models.CharField(blank=True, choices=STATUS_CHOICES, default="", max_length=30, verbose_name="Previous Status")),
                ("to_status", models.CharField(choices=STATUS_CHOICES, max_length=30, verbose_name="New Status")),
                ("message", models.TextField(blank=True, default="", verbose_name="Message")),
                ("case", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="status_logs", to="cases.case", verbose_name="Case")),
                ("changed_by", models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="case_status_changes", to=settings.AUTH_USER_MODEL, verbose_name="Changed By")),
            ],
            options={
                "verbose_name": "Case Status Log",
                "verbose_name_plural": "Case Status Logs",
                "ordering": ["created_at", "id"],
            },
        ),
    ]
