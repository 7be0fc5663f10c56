from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name="NoPenaltyFinalGrade",
            fields=[
                ("id", models.BigAutoField(primary_key=True, serialize=False)),
                ("courseid", models.BigIntegerField(verbose_name="Course ID")),
                ("userid", models.BigIntegerField(verbose_name="User ID")),
                ("itemid", models.BigIntegerField(help_text="The grade item backing the category.", verbose_name="Grade item ID")),
                ("itemtype", models.CharField(choices=[("course", "Course total"), ("category", "Category total"), ("mod", "Activity"), ("manual", "Manual item")], max_length=30, verbose_name="Grade item type")),
                ("grademin", models.FloatField(blank=True, null=True, verbose_name="Minimum grade")),
                ("grademax", models.FloatField(blank=True, null=True, verbose_name="Maximum grade")),
                ("finalgrade", models.FloatField(blank=True, help_text="The category grade with all penalties removed.", null=True, verbose_name="Final grade")),
                ("usermodified", models.BigIntegerField(blank=True, null=True, verbose_name="Modified by user ID")),
            ],
            options={
                "verbose_name": "No-penalty final grade",
                "verbose_name_plural": "No-penalty final grades",
                "db_table": "no_penalty_finalgrades",
                "ordering": ("courseid", "userid", "itemid"),
                "indexes": [models.Index(fields=["courseid", "userid"], name="no_penalty_course_user_idx")],
                "unique_together": {("courseid", "userid", "itemid")},
            },
        ),
    ]
