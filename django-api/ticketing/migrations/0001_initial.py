import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Event",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("authority", models.CharField(max_length=255)),
                ("name", models.CharField(max_length=255)),
                ("date", models.BigIntegerField(help_text="Scheduled start, seconds since epoch")),
                ("total_tickets", models.PositiveIntegerField()),
                ("remaining", models.PositiveIntegerField()),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "ordering": ["id"],
            },
        ),
        migrations.CreateModel(
            name="TicketCategory",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("position", models.PositiveIntegerField()),
                ("name", models.CharField(max_length=100)),
                ("price", models.DecimalField(decimal_places=2, max_digits=18)),
                ("initial", models.PositiveIntegerField()),
                ("remaining", models.PositiveIntegerField()),
                (
                    "event",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="categories",
                        to="ticketing.event",
                    ),
                ),
            ],
            options={
                "ordering": ["event", "position"],
            },
        ),
        migrations.CreateModel(
            name="Holding",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("holder", models.CharField(max_length=255)),
                ("category_name", models.CharField(max_length=100)),
                ("quantity", models.PositiveIntegerField(default=0)),
                (
                    "event",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="holdings",
                        to="ticketing.event",
                    ),
                ),
            ],
        ),
        migrations.AddConstraint(
            model_name="ticketcategory",
            constraint=models.UniqueConstraint(fields=("event", "position"), name="unique_category_position"),
        ),
        migrations.AddConstraint(
            model_name="ticketcategory",
            constraint=models.UniqueConstraint(fields=("event", "name"), name="unique_category_name"),
        ),
        migrations.AddConstraint(
            model_name="holding",
            constraint=models.UniqueConstraint(
                fields=("holder", "event", "category_name"), name="unique_holding_key"
            ),
        ),
        migrations.AddIndex(
            model_name="holding",
            index=models.Index(fields=["holder", "event"], name="holding_holder_event_idx"),
        ),
    ]
