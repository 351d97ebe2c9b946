# Generated migration for storage app (MySQL compatible)

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='UploadLimit',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('module', models.CharField(max_length=50, unique=True)),
                ('image_max_size_mb', models.PositiveIntegerField(default=0)),
                ('video_max_size_mb', models.PositiveIntegerField(default=0)),
                ('audio_max_size_mb', models.PositiveIntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'upload_limits',
                'ordering': ['module'],
            },
        ),
        migrations.CreateModel(
            name='OssConfig',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('access_key_id', models.CharField(blank=True, default='', max_length=255)),
                ('access_key_secret', models.TextField(blank=True, default='')),
                ('bucket', models.CharField(blank=True, default='', max_length=255)),
                ('region', models.CharField(default='cn-hangzhou', max_length=100)),
                ('endpoint', models.CharField(blank=True, default='', max_length=255)),
                ('domain', models.CharField(blank=True, default='', max_length=255)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'oss_configs',
            },
        ),
        migrations.CreateModel(
            name='StorageConfig',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('default_storage', models.CharField(choices=[('local', '本地存储'), ('oss', '阿里云OSS')], default='local', max_length=20)),
                ('max_file_size', models.PositiveIntegerField(default=100)),
                ('enable_cleanup', models.BooleanField(default=False)),
                ('cleanup_days', models.PositiveIntegerField(default=30)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'storage_configs',
            },
        ),
    ]
