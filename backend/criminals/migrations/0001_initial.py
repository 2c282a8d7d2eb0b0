import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("stations", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Criminal",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("name", models.CharField(max_length=255, verbose_name="Full Name")),
                ("age", models.PositiveSmallIntegerField(blank=True, null=True, verbose_name="Age")),
                ("gender", models.CharField(blank=True, choices=[("male", "Male"), ("female", "Female"), ("other", "Other")], default="", max_length=10, verbose_name="Gender")),
                ("phone_number", models.CharField(blank=True, default="", max_length=15, verbose_name="Phone Number")),
                ("email", models.EmailField(blank=True, default="", max_length=254, verbose_name="Email")),
                ("address", models.CharField(blank=True, default="", max_length=500, verbose_name="Address")),
                ("identification_marks", models.TextField(blank=True, default="", verbose_name="Identification Marks")),
                ("status", models.CharField(choices=[("arrested", "Arrested"), ("wanted", "Wanted"), ("released", "Released"), ("in_trial", "In Trial"), ("convicted", "Convicted")], db_index=True, default="arrested", max_length=20, verbose_name="Status")),
                ("registered_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="registered_criminals", to=settings.AUTH_USER_MODEL, verbose_name="Registered By")),
                ("station", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name="criminals", to="stations.station", verbose_name="Registering Station")),
            ],
            options={
                "verbose_name": "Criminal",
                "verbose_name_plural": "Criminals",
                "ordering": ["name", "id"],
            },
        ),
    ]
