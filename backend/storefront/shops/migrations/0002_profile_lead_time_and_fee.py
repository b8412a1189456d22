from decimal import Decimal

from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("shops", "0001_initial"),
    ]

    operations = [
        migrations.AddField(
            model_name="profile",
            name="lead_time_hours",
            field=models.PositiveIntegerField(default=24),
        ),
        migrations.AddField(
            model_name="profile",
            name="platform_fee_percentage",
            field=models.DecimalField(decimal_places=2, default=Decimal("10.00"), max_digits=5),
        ),
    ]
