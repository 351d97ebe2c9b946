# Generated migration for ai_platforms app (MySQL compatible)

from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='AIPlatform',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100, unique=True)),
                ('logo_url', models.CharField(blank=True, default='', max_length=500)),
                ('type', models.CharField(choices=[('IMAGE', '图片'), ('VIDEO', '视频')], max_length=10)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'ai_platforms',
                'ordering': ['name'],
            },
        ),
        migrations.AddIndex(
            model_name='aiplatform',
            index=models.Index(fields=['type'], name='ai_platforms_type_idx'),
        ),
        migrations.CreateModel(
            name='AIModel',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('platform', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='models', to='ai_platforms.aiplatform')),
            ],
            options={
                'db_table': 'ai_models',
                'ordering': ['name'],
            },
        ),
        migrations.AddConstraint(
            model_name='aimodel',
            constraint=models.UniqueConstraint(fields=('platform', 'name'), name='uniq_platform_model'),
        ),
    ]
