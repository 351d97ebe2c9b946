# Generated migration for interactions app: notes can be liked and favorited

from django.db import migrations, models


ENTITY_CHOICES = [('POST', '作品'), ('NOTE', '笔记'), ('SCREENING', '放映')]


class Migration(migrations.Migration):

    dependencies = [
        ('interactions', '0001_initial'),
    ]

    operations = [
        migrations.AlterField(
            model_name='like',
            name='entity_type',
            field=models.CharField(choices=ENTITY_CHOICES, max_length=20),
        ),
        migrations.AlterField(
            model_name='favorite',
            name='entity_type',
            field=models.CharField(choices=ENTITY_CHOICES, max_length=20),
        ),
        migrations.AlterField(
            model_name='comment',
            name='entity_type',
            field=models.CharField(choices=ENTITY_CHOICES, max_length=20),
        ),
    ]
