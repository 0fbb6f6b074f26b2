from django.db import migrations

ROLE_NAMES = ['admin', 'user']


def create_roles(apps, schema_editor):
    Role = apps.get_model('authentication', 'Role')
    for name in ROLE_NAMES:
        Role.objects.get_or_create(name=name)


def remove_roles(apps, schema_editor):
    Role = apps.get_model('authentication', 'Role')
    Role.objects.filter(name__in=ROLE_NAMES, users__isnull=True).delete()


class Migration(migrations.Migration):

    dependencies = [
        ('authentication', '0001_initial'),
    ]

    operations = [
        migrations.RunPython(create_roles, remove_roles),
    ]
