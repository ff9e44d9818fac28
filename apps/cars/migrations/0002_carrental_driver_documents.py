from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("cars", "0001_initial"),
    ]

    operations = [
        migrations.AddField(
            model_name="carrental",
            name="driver_license_expiry",
            field=models.DateField(blank=True, null=True),
        ),
        migrations.AddField(
            model_name="carrental",
            name="driver_date_of_birth",
            field=models.DateField(blank=True, null=True),
        ),
    ]
