# Generated migration for interactions app (MySQL compatible)

from django.db import migrations, models
import django.db.models.deletion


ENTITY_CHOICES = [('POST', '作品'), ('SCREENING', '放映')]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('authentication', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Like',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('entity_type', models.CharField(choices=ENTITY_CHOICES, max_length=20)),
                ('entity_id', models.BigIntegerField()),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='likes', to='authentication.user')),
            ],
            options={
                'db_table': 'likes',
                'ordering': ['-created_at'],
            },
        ),
        migrations.AddConstraint(
            model_name='like',
            constraint=models.UniqueConstraint(fields=('user', 'entity_type', 'entity_id'), name='uniq_like'),
        ),
        migrations.AddIndex(
            model_name='like',
            index=models.Index(fields=['entity_type', 'entity_id'], name='likes_entity_idx'),
        ),
        migrations.CreateModel(
            name='Favorite',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('entity_type', models.CharField(choices=ENTITY_CHOICES, max_length=20)),
                ('entity_id', models.BigIntegerField()),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='favorites', to='authentication.user')),
            ],
            options={
                'db_table': 'favorites',
                'ordering': ['-created_at'],
            },
        ),
        migrations.AddConstraint(
            model_name='favorite',
            constraint=models.UniqueConstraint(fields=('user', 'entity_type', 'entity_id'), name='uniq_favorite'),
        ),
        migrations.AddIndex(
            model_name='favorite',
            index=models.Index(fields=['entity_type', 'entity_id'], name='favorites_entity_idx'),
        ),
        migrations.CreateModel(
            name='Comment',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('entity_type', models.CharField(choices=ENTITY_CHOICES, max_length=20)),
                ('entity_id', models.BigIntegerField()),
                ('content', models.TextField()),
                ('status', models.CharField(choices=[('VISIBLE', '可见'), ('HIDDEN', '隐藏'), ('DELETED', '已删除')], default='VISIBLE', max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='comments', to='authentication.user')),
            ],
            options={
                'db_table': 'comments',
                'ordering': ['created_at'],
            },
        ),
        migrations.AddIndex(
            model_name='comment',
            index=models.Index(fields=['entity_type', 'entity_id'], name='comments_entity_idx'),
        ),
    ]
