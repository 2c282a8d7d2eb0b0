import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Station",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("sid", models.BigIntegerField(primary_key=True, serialize=False, verbose_name="Station ID")),
                ("name", models.CharField(max_length=255, verbose_name="Station Name")),
                ("address", models.CharField(blank=True, default="", max_length=500, verbose_name="Address")),
                ("phone_number", models.CharField(blank=True, default="", max_length=15, verbose_name="Phone Number")),
                ("approval", models.BooleanField(db_index=True, default=False, verbose_name="Approved")),
                ("admin", models.OneToOneField(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="administered_station", to=settings.AUTH_USER_MODEL, verbose_name="Station Administrator")),
            ],
            options={
                "verbose_name": "Station",
                "verbose_name_plural": "Stations",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Officer",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("hrms", models.BigIntegerField(primary_key=True, serialize=False, verbose_name="HRMS Number")),
                ("rank", models.CharField(blank=True, default="", max_length=100, verbose_name="Rank")),
                ("approval", models.BooleanField(db_index=True, default=False, verbose_name="Approved")),
                ("station", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="officers", to="stations.station", verbose_name="Station")),
                ("user", models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name="officer_profile", to=settings.AUTH_USER_MODEL, verbose_name="User Account")),
            ],
            options={
                "verbose_name": "Officer",
                "verbose_name_plural": "Officers",
                "ordering": ["hrms"],
            },
        ),
        migrations.AddField(
            model_name="station",
            name="incharge",
            field=models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="+", to="stations.officer", verbose_name="Station In-charge"),
        ),
    ]
