from django.db import migrations

DEPARTMENTS = [
    ("Computer Science", "CSE"),
    ("Electrical Engineering", "EEE"),
    ("Mechanical Engineering", "ME"),
    ("Civil Engineering", "CE"),
    ("Business Administration", "BBA"),
]


def forwards(apps, schema_editor):
    Department = apps.get_model("academics", "Department")
    for name, code in DEPARTMENTS:
        Department.objects.get_or_create(code=code, defaults={"name": name})


def backwards(apps, schema_editor):
    Department = apps.get_model("academics", "Department")
    Department.objects.filter(code__in=[code for _, code in DEPARTMENTS]).delete()


class Migration(migrations.Migration):

    dependencies = [
        ("academics", "0001_initial"),
    ]

    operations = [
        migrations.RunPython(forwards, backwards),
    ]
