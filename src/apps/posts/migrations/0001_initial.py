import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Post",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(
                        auto_now_add=True,
                        db_index=True,
                        help_text="Timestamp when the record was created",
                    ),
                ),
                (
                    "updated_at",
                    models.DateTimeField(
                        auto_now=True,
                        help_text="Timestamp when the record was last updated",
                    ),
                ),
                (
                    "title",
                    models.CharField(
                        help_text="The title of the post.", max_length=200
                    ),
                ),
                (
                    "content",
                    models.TextField(
                        help_text="The main content of the post.",
                        validators=[django.core.validators.MaxLengthValidator(5000)],
                    ),
                ),
                (
                    "author",
                    models.CharField(
                        db_index=True,
                        help_text="Display name of the post author.",
                        max_length=50,
                    ),
                ),
                (
                    "view_count",
                    models.PositiveBigIntegerField(
                        default=0, help_text="Number of times the post has been viewed."
                    ),
                ),
            ],
            options={
                "verbose_name": "Post",
                "verbose_name_plural": "Posts",
                "ordering": ["-created_at", "-id"],
                "abstract": False,
                "indexes": [
                    models.Index(
                        fields=["-view_count", "-created_at"], name="idx_post_popular"
                    )
                ],
            },
        ),
    ]
